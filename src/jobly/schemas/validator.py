"""Request validation using the jsonschema library."""

from functools import lru_cache
from pathlib import Path

import jsonschema

from jobly.errors.exceptions import ValidationError
from jobly.schemas.loader import SCHEMA_DIR, load_json
from jobly.schemas.registry import SCHEMA_REGISTRY


class SchemaValidator:
    """Validates request payloads against the bundled JSON Schemas."""

    def __init__(self, schema_dir: str | Path = SCHEMA_DIR):
        self.schema_dir = Path(schema_dir).resolve()

    @lru_cache(maxsize=32)
    def _validator(self, schema_name: str) -> jsonschema.Draft7Validator:
        schema = load_json(self.schema_dir / SCHEMA_REGISTRY[schema_name])
        return jsonschema.Draft7Validator(schema, format_checker=jsonschema.FormatChecker())

    def errors(self, instance: dict, schema_name: str) -> list[str]:
        """Return one message per violation, empty when the instance is valid.

        Raises:
            KeyError: If schema_name is not in the registry.
        """
        found = self._validator(schema_name).iter_errors(instance)
        return [
            f"{'/'.join(str(p) for p in err.absolute_path) or 'instance'}: {err.message}"
            for err in sorted(found, key=lambda e: [str(p) for p in e.absolute_path])
        ]

    def validate(self, instance: dict, schema_name: str) -> None:
        """Raise ValidationError listing every violation of the named schema."""
        errs = self.errors(instance, schema_name)
        if errs:
            raise ValidationError("Request failed schema validation", details=errs)


validator = SchemaValidator()
