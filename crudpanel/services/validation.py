"""
Rule Validation

Widgets declare validation as short rule strings ("required", "max:255",
"in:draft,published"). This module compiles a set of field rules into a
pydantic model and validates request input against it.

Supported rules:
    required, nullable                 presence
    string, integer, numeric,          type (values are coerced, so "5" is a
    boolean, array                     valid integer)
    min:N, max:N                       value for numbers, length otherwise
    in:a,b,c                           membership
    email                              address syntax, checked by email-validator

Keys ending in ".*" (``"tags.*"``) apply their rules to every item of the
list field named before the dot. Unknown rules are ignored. Blank input
(None, whitespace, empty list) counts as missing: it fails "required" and
is stored as None otherwise.
"""

import logging
from collections.abc import Callable, Mapping
from typing import Annotated, Any, Optional

from pydantic import AfterValidator, BaseModel, BeforeValidator, Field, ValidationError, create_model
from pydantic.networks import validate_email
from pydantic_core import PydanticCustomError

from crudpanel.core.exceptions import WidgetValidationError
from crudpanel.core.http import is_blank
from crudpanel.core.translation import trans

logger = logging.getLogger(__name__)

TYPE_RULES: dict[str, type] = {
    "string": str,
    "integer": int,
    "numeric": float,
    "boolean": bool,
    "array": list,
}

_RULE_ERRORS = {"required", "min", "max", "in", "email"}


def parse_rule(rule: str) -> tuple[str, list[str]]:
    """Split "max:255" into ("max", ["255"])."""
    name, _, params = rule.partition(":")
    return name.strip().lower(), [param.strip() for param in params.split(",")] if params else []


def _size(value: Any) -> tuple[float, str] | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value, "numeric"
    if isinstance(value, str):
        return len(value), "string"
    if isinstance(value, (list, tuple, dict)):
        return len(value), "array"
    return None


def _blank_check(required: bool, attribute: str) -> Callable[[Any], Any]:
    def check(value: Any) -> Any:
        if not is_blank(value):
            return value
        if required:
            raise PydanticCustomError("required", trans("validation.required", attribute=attribute))
        return None

    return check


def _size_check(rule: str, limit: float, attribute: str) -> Callable[[Any], Any]:
    def check(value: Any) -> Any:
        measured = _size(value)
        if measured is None:
            return value
        size, kind = measured
        if (rule == "min" and size < limit) or (rule == "max" and size > limit):
            shown = int(limit) if limit == int(limit) else limit
            raise PydanticCustomError(
                rule, trans(f"validation.{rule}.{kind}", attribute=attribute, **{rule: shown})
            )
        return value

    return check


def _in_check(choices: list[str], attribute: str) -> Callable[[Any], Any]:
    def check(value: Any) -> Any:
        if value is not None and str(value) not in choices:
            raise PydanticCustomError("in", trans("validation.in", attribute=attribute))
        return value

    return check


def _email_check(attribute: str) -> Callable[[Any], Any]:
    def check(value: Any) -> Any:
        if value is None:
            return value
        error = PydanticCustomError("email", trans("validation.email", attribute=attribute))
        if not isinstance(value, str):
            raise error
        try:
            validate_email(value)
        except PydanticCustomError as e:
            raise error from e
        return value

    return check


class _FieldSpec:
    """Compiled rules of one field."""

    def __init__(self, key: str, rules: list[str], attribute: str):
        self.key = key
        self.required = False
        self.type_rule: str | None = None
        self.base: Any = Any
        self.attribute = attribute
        self.checks: list[Callable[[Any], Any]] = []

        for rule in rules:
            name, params = parse_rule(rule)
            if name == "required":
                self.required = True
            elif name == "nullable":
                continue
            elif name in TYPE_RULES:
                self.type_rule = name
                self.base = TYPE_RULES[name]
            elif name in ("min", "max") and params:
                self.checks.append(_size_check(name, float(params[0]), attribute))
            elif name == "in":
                self.checks.append(_in_check(params, attribute))
            elif name == "email":
                self.checks.append(_email_check(attribute))
            else:
                logger.debug(f"Ignoring unsupported validation rule '{rule}' on '{key}'")

    def annotation(self) -> Any:
        # Blank input becomes None (or a required error) before the type is checked
        base = self.base if self.required else Optional[self.base]
        return Annotated[
            tuple(
                [
                    base,
                    BeforeValidator(_blank_check(self.required, self.attribute)),
                    *(AfterValidator(check) for check in self.checks),
                ]
            )
        ]


def build_validation_model(
    rules: Mapping[str, list[str]],
    attributes: Mapping[str, str] | None = None,
) -> tuple[type[BaseModel], dict[str, _FieldSpec]]:
    """
    Compile field rules into a pydantic model.

    Field names are passed as aliases, so names clashing with BaseModel
    attributes ("copy", "json", ...) are safe.

    Args:
        rules: Field name to rule list, as returned by Widget.validation_rules()
        attributes: Field name to display title for messages

    Returns:
        (model class, compiled field specs keyed by field name)
    """
    attributes = attributes or {}
    specs: dict[str, _FieldSpec] = {}
    item_specs: dict[str, _FieldSpec] = {}

    for key, field_rules in rules.items():
        attribute = attributes.get(key) or key
        if key.endswith(".*"):
            item_specs[key[:-2]] = _FieldSpec(key, list(field_rules), attribute)
        else:
            specs[key] = _FieldSpec(key, list(field_rules), attribute)

    for parent, item_spec in item_specs.items():
        spec = specs.setdefault(parent, _FieldSpec(parent, [], attributes.get(parent) or parent))
        spec.base = list[item_spec.annotation()]
        spec.type_rule = "array"

    fields: dict[str, Any] = {}
    for index, (key, spec) in enumerate(specs.items()):
        if spec.required:
            fields[f"field_{index}"] = (spec.annotation(), Field(alias=key))
        else:
            fields[f"field_{index}"] = (spec.annotation(), Field(default=None, alias=key))

    return create_model("WidgetInput", **fields), specs


def validate_input(
    data: Mapping[str, Any],
    rules: Mapping[str, list[str]],
    attributes: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    """
    Validate request input against field rules.

    Args:
        data: Request input
        rules: Field name to rule list
        attributes: Field name to display title for messages

    Returns:
        Coerced values of the fields present in data

    Raises:
        WidgetValidationError: With localized messages grouped per field
    """
    attributes = attributes or {}
    model, specs = build_validation_model(rules, attributes)
    try:
        validated = model.model_validate(dict(data))
    except ValidationError as e:
        errors: dict[str, list[str]] = {}
        for error in e.errors():
            loc = error.get("loc") or ("",)
            field = str(loc[0])
            attribute = attributes.get(field) or field
            kind = error["type"]
            if kind == "missing":
                message = trans("validation.required", attribute=attribute)
            elif kind in _RULE_ERRORS:
                message = error["msg"]
            elif specs.get(field) and specs[field].type_rule:
                message = trans(f"validation.{specs[field].type_rule}", attribute=attribute)
            else:
                message = trans("validation.invalid", attribute=attribute)
            errors.setdefault(field, [])
            if message not in errors[field]:
                errors[field].append(message)
        logger.debug(f"Validation failed for fields: {sorted(errors)}")
        raise WidgetValidationError(errors) from e

    return validated.model_dump(by_alias=True, exclude_unset=True)
