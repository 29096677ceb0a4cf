from typing import Any, ClassVar, override

import httpx
from pydantic import BaseModel, ConfigDict, Field

from ..rate_class import RateClass
from .rules import DEFAULT_RULES, Rule


def _pathname(url: str | httpx.URL) -> str | None:
    # Percent-encoded, so "%2F" and "%3A" never act as separators or verbs.
    try:
        raw_path = httpx.URL(url).raw_path
        return raw_path.split(b"?", 1)[0].decode("ascii")
    except (httpx.InvalidURL, TypeError, UnicodeDecodeError):
        return None


class RequestClassifier(BaseModel):
    """Maps an outgoing request to exactly one rate class.

    Rules are evaluated in order and the first match wins. Requests outside
    ``base_path``, or matching no rule at all, are ``RateClass.UNCLASSIFIED``
    and are never throttled.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    base_path: str = Field(default="")
    rules: tuple[Rule, ...] = Field(default=DEFAULT_RULES)

    @override
    def model_post_init(self, context: Any, /) -> None:
        if self.base_path.endswith("/"):
            raise ValueError(f"Base path '{self.base_path}' must not end with '/'")
        super().model_post_init(context)

    def _relative_path(self, path: str) -> str | None:
        if not self.base_path:
            return path

        if not path.startswith(self.base_path):
            return None

        relative = path[len(self.base_path) :]
        if relative and not relative.startswith("/"):
            # "/public/v0.2bis/plans" shares a prefix but not the segment
            return None
        return relative or "/"

    def classify(self, method: str, url: str | httpx.URL) -> RateClass:
        """Classify a request.

        Parameters
        ----------
        method : str
            The HTTP method, in any case.
        url : str | httpx.URL
            An absolute URL, or a path with an optional query string. Only the
            pathname is taken into account.

        Returns
        -------
        RateClass
            The class of the first matching rule, or ``RateClass.UNCLASSIFIED``.
        """
        path = _pathname(url)
        if path is None:
            return RateClass.UNCLASSIFIED

        relative = self._relative_path(path)
        if relative is None:
            return RateClass.UNCLASSIFIED

        method = method.upper()
        for candidate in self.rules:
            if candidate.matches(method, relative):
                return candidate.rate_class

        return RateClass.UNCLASSIFIED


_DEFAULT_CLASSIFIER = RequestClassifier()


def classify(method: str, path: str | httpx.URL) -> RateClass:
    """Classify a request by method and API-relative path (e.g. ``/plans/123:optimize``)."""
    return _DEFAULT_CLASSIFIER.classify(method, path)
