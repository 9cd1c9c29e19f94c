"""Parses material record documents and serializes them back for export."""

import logging
from typing import Any

from compositelab.data.mapped import property_group_titles
from compositelab.schema.material_record import GeneratedCode, MaterialRecord, PropertyEntry, PropertyGroup
from compositelab.utils.logging import get_logger
from compositelab.utils.validation import validate_identifier

ENTRY_KEYS = ("label", "value", "unit", "display_value")
RECORD_KEYS = (
    "id",
    "name",
    "type",
    "manufacturer",
    "description",
    "detailed_description",
    *property_group_titles,
    "abaqus",
    "references",
    "notes",
)


class RecordParser:
    """
    Convert decoded material JSON into a MaterialRecord.

    Only field presence and container types are checked; anything unrecognised
    is carried along in ``extra`` mappings.

    Parameters
    ----------
    logger : logging.Logger, optional
        Custom logger for diagnostics and traceability.
    verbose : bool, optional
        If True, enables detailed logging output.
    """

    def __init__(self, logger: logging.Logger | None = None, verbose: bool = False) -> None:
        self.logger = logger or get_logger(f"{__name__}.{self.__class__.__name__}", verbose=verbose)

    def parse(self, document: Any) -> MaterialRecord:
        """
        Build a record from one decoded material file.

        Parameters
        ----------
        document : Any
            Decoded JSON object.

        Returns
        -------
        MaterialRecord
            Parsed, immutable record.

        Raises
        ------
        ValueError
            If the document is not an object, lacks an ``id``, or has containers of the wrong type.
        """
        if not isinstance(document, dict):
            raise ValueError(f"Material record must be a JSON object, got {type(document).__name__}")

        try:
            identifier = validate_identifier(document.get("id"))
        except ValueError as e:
            self.logger.error(f"Material record without usable id: {e}")
            raise

        name = self._optional_text(document, "name", identifier)
        if name is None:
            self.logger.warning(f"[{identifier}] missing 'name'; using the identifier")
            name = identifier

        category_tag = self._optional_text(document, "type", identifier)
        if category_tag is None:
            self.logger.warning(f"[{identifier}] missing 'type'; record will not appear in any category")
            category_tag = ""

        groups = tuple(
            self._parse_group(identifier, group_name, document[group_name])
            for group_name in property_group_titles
            if document.get(group_name) is not None
        )

        extra = {key: value for key, value in document.items() if key not in RECORD_KEYS}
        code = self._parse_code(identifier, document.get("abaqus"), extra)

        record = MaterialRecord(
            identifier=identifier,
            name=name,
            category_tag=category_tag,
            description=self._optional_text(document, "description", identifier),
            manufacturer=self._optional_text(document, "manufacturer", identifier),
            detailed_description=self._optional_text(document, "detailed_description", identifier),
            property_groups=groups,
            code=code,
            references=self._parse_references(identifier, document.get("references")),
            notes=self._optional_text(document, "notes", identifier),
            extra=extra,
        )
        self.logger.debug(f"Parsed material '{identifier}' with groups {[g.name for g in groups]}")
        return record

    def _optional_text(self, document: dict[str, Any], key: str, identifier: str) -> str | None:
        """Return ``document[key]`` as text, ``None`` when absent or null."""
        value = document.get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            self.logger.debug(f"[{identifier}] coercing '{key}' from {type(value).__name__} to str")
            return str(value)
        return value

    def _parse_group(self, identifier: str, group_name: str, raw: Any) -> PropertyGroup:
        if not isinstance(raw, dict):
            raise ValueError(f"[{identifier}] property group '{group_name}' must be an object, got {type(raw).__name__}")

        entries = []
        for key, prop in raw.items():
            if not isinstance(prop, dict):
                raise ValueError(f"[{identifier}] property '{group_name}.{key}' must be an object")

            display_value = prop.get("display_value")
            if display_value is not None and not isinstance(display_value, str):
                display_value = str(display_value)

            label = prop.get("label")
            if label is None:
                self.logger.warning(f"[{identifier}] property '{group_name}.{key}' has no label; using key")
                label = key

            if not display_value and prop.get("value") is None:
                self.logger.warning(f"[{identifier}] property '{group_name}.{key}' has neither value nor display_value")

            unit = prop.get("unit")
            entries.append(
                PropertyEntry(
                    key=key,
                    label=str(label),
                    value=prop.get("value"),
                    unit="" if unit is None else str(unit),
                    display_value=display_value,
                    extra={k: v for k, v in prop.items() if k not in ENTRY_KEYS},
                )
            )
        return PropertyGroup(name=group_name, entries=tuple(entries))

    def _parse_code(self, identifier: str, raw: Any, extra: dict[str, Any]) -> GeneratedCode | None:
        if raw is None:
            return None
        if not isinstance(raw, dict) or not isinstance(raw.get("template"), str):
            # keep the section untouched for export, but nothing to copy
            self.logger.warning(f"[{identifier}] 'abaqus' section has no text template")
            extra["abaqus"] = raw
            return None
        return GeneratedCode(template=raw["template"], extra={k: v for k, v in raw.items() if k != "template"})

    def _parse_references(self, identifier: str, raw: Any) -> tuple[str, ...] | None:
        if raw is None:
            return None
        if not isinstance(raw, list):
            raise ValueError(f"[{identifier}] 'references' must be a list, got {type(raw).__name__}")
        return tuple(ref if isinstance(ref, str) else str(ref) for ref in raw)


def record_to_dict(record: MaterialRecord) -> dict[str, Any]:
    """
    Serialize a record back into the on-disk material document layout.

    Parsing the result with :class:`RecordParser` yields a record equal to ``record``.
    """
    document: dict[str, Any] = {"id": record.identifier, "name": record.name, "type": record.category_tag}

    for key in ("manufacturer", "description", "detailed_description"):
        value = getattr(record, key)
        if value is not None:
            document[key] = value

    for group in record.property_groups:
        document[group.name] = {entry.key: _entry_to_dict(entry) for entry in group.entries}

    if record.code is not None:
        document["abaqus"] = {"template": record.code.template, **record.code.extra}
    if record.references is not None:
        document["references"] = list(record.references)
    if record.notes is not None:
        document["notes"] = record.notes

    document.update(record.extra)
    return document


def _entry_to_dict(entry: PropertyEntry) -> dict[str, Any]:
    payload: dict[str, Any] = {"label": entry.label}
    if entry.value is not None:
        payload["value"] = entry.value
    payload["unit"] = entry.unit
    if entry.display_value is not None:
        payload["display_value"] = entry.display_value
    payload.update(entry.extra)
    return payload
