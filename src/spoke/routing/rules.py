from typing import ClassVar

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ..rate_class import RateClass
from .path_template import PathTemplate, has_custom_verb


class Rule(BaseModel):
    """Assigns a rate class to requests matching a method set and path templates.

    A rule without templates matches any path, except custom verb routes
    (``/plans/123:optimize``) when ``custom_verbs`` is False. A rule without
    methods matches any method. Both constraints must hold for the rule to apply.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True)

    rate_class: RateClass
    methods: frozenset[str] = Field(default_factory=frozenset)
    templates: tuple[PathTemplate, ...] = Field(default_factory=tuple)
    custom_verbs: bool = Field(default=True)

    @field_validator("methods", mode="before")
    @classmethod
    def _normalize_methods(cls, value: object) -> object:
        if isinstance(value, str):
            value = [value]
        if isinstance(value, (list, tuple, set, frozenset)):
            return frozenset(str(method).upper() for method in value)
        return value

    @field_validator("templates", mode="before")
    @classmethod
    def _parse_templates(cls, value: object) -> object:
        if isinstance(value, (str, PathTemplate)):
            value = [value]
        if isinstance(value, (list, tuple)):
            return tuple(
                PathTemplate.parse(template) if isinstance(template, str) else template
                for template in value
            )
        return value

    def matches(self, method: str, path: str) -> bool:
        """Check whether the rule applies to an upper-cased method and a pathname."""
        if self.methods and method not in self.methods:
            return False

        if not self.templates:
            return self.custom_verbs or not has_custom_verb(path)

        return any(template.matches(path) for template in self.templates)


def rule(
    rate_class: RateClass,
    methods: str | list[str],
    *templates: str,
    custom_verbs: bool = True,
) -> Rule:
    return Rule(
        rate_class=rate_class,
        methods=methods,
        templates=list(templates),
        custom_verbs=custom_verbs,
    )


DEFAULT_RULES: tuple[Rule, ...] = (
    rule(RateClass.DRIVER_CREATION, "POST", "/drivers"),
    rule(
        RateClass.BATCH_IMPORT_STOPS,
        "POST",
        "/plans/:planId/stops:import",
        "/unassignedStops:import",
    ),
    rule(RateClass.BATCH_IMPORT_DRIVERS, "POST", "/drivers:import"),
    rule(
        RateClass.PLAN_OPTIMIZATION,
        "POST",
        "/plans/:planId:optimize",
        "/plans/:planId:reoptimize",
    ),
    rule(RateClass.WRITE, ["POST", "PATCH", "DELETE"]),
    # Custom verbs are only ever invoked with POST.
    rule(RateClass.READ, "GET", custom_verbs=False),
)
