"""Verdict model shared by every check, and the base for validated check inputs."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from .wcag_rules import WCAG_RULES

PASS = "pass"
FAIL = "fail"
WARNING = "warning"
INFO = "info"

Value = Union[str, int, float, bool]


@dataclass(frozen=True)
class Verdict:
    """The outcome of one rule evaluated against one criterion."""

    criterion: str
    name: str
    level: str          # "A" | "AA" | "AAA"
    status: str         # "pass" | "fail" | "warning" | "info"
    message: str
    value: Optional[Value] = None
    required: Optional[Union[str, int, float]] = None
    recommendation: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "criterion": self.criterion,
            "name": self.name,
            "level": self.level,
            "status": self.status,
            "value": self.value,
            "required": self.required,
            "message": self.message,
            "recommendation": self.recommendation,
        }
        return {k: v for k, v in data.items() if v is not None}


def verdict(
    criterion: str,
    status: str,
    message: str,
    *,
    value: Optional[Value] = None,
    required: Optional[Union[str, int, float]] = None,
    recommendation: Optional[str] = None,
    name: Optional[str] = None,
) -> Verdict:
    """Build a verdict, filling name and level from the criteria table.

    *name* overrides the catalogue name when a check reports on one facet of a
    criterion (e.g. "Visual Presentation (Line Length)").
    """
    rule = WCAG_RULES[criterion]
    return Verdict(
        criterion=criterion,
        name=name or rule.name,
        level=rule.level,
        status=status,
        message=message,
        value=value,
        required=required,
        recommendation=recommendation,
    )


def fmt_num(x: float) -> str:
    """Render a number as given, minus a trailing ``.0`` (``3.0`` -> ``3``, ``1234567.0`` -> ``1234567``)."""
    text = repr(x)
    return text[:-2] if text.endswith(".0") else text


def join_present(*labels: Any) -> str:
    """Join the truthy labels with ", " (used for "mechanisms present" messages)."""
    return ", ".join(str(label) for label in labels if label)


# ---------------------------------------------------------------------------
# Payload validation
# ---------------------------------------------------------------------------


class PayloadError(ValueError):
    """Raised when a payload does not match the declared input shape."""


class InputModel(BaseModel):
    """
    Base for every check input.

    Payload keys may be camelCase (``hasLangAttribute``) or snake_case
    (``has_lang_attribute``).  Unknown keys and wrongly typed values are
    rejected during validation.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="forbid")


M = TypeVar("M", bound=BaseModel)


def parse_payload(model: Type[M], payload: Any) -> M:
    """Validate *payload* against *model*, raising :class:`PayloadError` on failure."""
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise PayloadError(f"{_describe(exc)} ({model.__name__})") from exc


def _describe(exc: ValidationError) -> str:
    problems: List[str] = []
    for err in exc.errors():
        where = ".".join(str(part) for part in err["loc"])
        if err["type"] == "extra_forbidden":
            problems.append(f"Unexpected field {where!r}")
        elif where:
            problems.append(f"{where}: {err['msg']}")
        else:
            problems.append(err["msg"])
    return "; ".join(problems)
