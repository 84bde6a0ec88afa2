"""Maps heterogeneous provider output onto the canonical field schemas."""

import json
import re
from dataclasses import dataclass, field
from typing import Any

from taxdocs.documents.models import DocumentType, ExtractedTaxData
from taxdocs.extraction.schemas import (
    ENTITY_FIELD_MAPS,
    LABEL_KEYWORD_RULES,
    RELEVANT_BOXES,
    empty_record,
    field_names,
)

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]")


def normalize_label(label: str) -> str:
    """Lowercase and drop every non-alphanumeric character."""
    return _NON_ALPHANUMERIC.sub("", label.lower())


@dataclass(frozen=True)
class ProviderEntity:
    """A typed entity reported by a document processor."""

    type: str
    value: str
    confidence: float | None = None


@dataclass(frozen=True)
class ProviderFormField:
    """A free-form key/value pair reported by a document processor."""

    label: str
    value: str
    confidence: float | None = None


@dataclass(frozen=True)
class ProviderDocument:
    """Provider-neutral view of a document processor response."""

    text: str = ""
    entities: tuple[ProviderEntity, ...] = field(default_factory=tuple)
    form_fields: tuple[ProviderFormField, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class MatchPolicy:
    """How labels are matched to canonical fields.

    overwrite_assigned: allow a later match to replace an already filled field.
    min_reverse_match_length: a label contained in a field name only counts when
        its normalized form has at least this many characters ("tax" is too short).
    """

    overwrite_assigned: bool = False
    min_reverse_match_length: int = 5


class FieldNormalizer:
    """Builds canonical extracted data from entities, form fields or LLM JSON."""

    def __init__(self, policy: MatchPolicy | None = None) -> None:
        self._policy = policy or MatchPolicy()

    def normalize_provider_document(
        self,
        document: ProviderDocument,
        document_type: DocumentType,
    ) -> ExtractedTaxData:
        """Entities first (direct type mapping), then form fields (fuzzy)."""
        record = empty_record(document_type)
        assigned: set[str] = set()
        entity_map = ENTITY_FIELD_MAPS.get(document_type, {})

        unmapped: list[tuple[str, str]] = []
        for entity in document.entities:
            target = entity_map.get(entity.type)
            if target is None:
                unmapped.append((entity.type, entity.value))
                continue
            self._assign(record, assigned, target, entity.value)

        labelled = unmapped + [(f.label, f.value) for f in document.form_fields]
        for label, value in labelled:
            target = self.match_field(label, document_type, assigned)
            if target is not None:
                self._assign(record, assigned, target, value)

        return ExtractedTaxData(
            document_type=document_type,
            ocr_text=document.text,
            extracted_data=record,
            confidence=self.average_confidence(document),
        )

    def normalize_llm_payload(
        self,
        payload: dict[str, Any],
        document_type: DocumentType,
        confidence: float,
    ) -> ExtractedTaxData:
        """Accept {documentType, ocrText, extractedData} or a flat field object."""
        resolved_type = DocumentType.parse(payload.get("documentType")) or document_type
        raw_fields = payload.get("extractedData")
        if not isinstance(raw_fields, dict):
            raw_fields = {
                k: v for k, v in payload.items() if k not in ("documentType", "ocrText")
            }

        record = empty_record(resolved_type)
        assigned: set[str] = set()
        leftovers: list[tuple[str, Any]] = []
        for key, value in raw_fields.items():
            if key in record:
                self._assign(record, assigned, key, value)
            else:
                leftovers.append((key, value))
        for key, value in leftovers:
            target = self.match_field(key, resolved_type, assigned)
            if target is not None:
                self._assign(record, assigned, target, value)

        ocr_text = payload.get("ocrText")
        return ExtractedTaxData(
            document_type=resolved_type,
            ocr_text=ocr_text if isinstance(ocr_text, str) else "",
            extracted_data=record,
            confidence=_clamp_confidence(confidence),
        )

    def match_field(
        self,
        label: str,
        document_type: DocumentType,
        assigned: set[str] | None = None,
    ) -> str | None:
        """Return the canonical field a free-form label should fill, if any.

        Keyword rules are tried first, then substring matching in field
        declaration order. Fields in `assigned` are skipped unless the policy
        allows overwriting.
        """
        normalized = normalize_label(label or "")
        if not normalized:
            return None
        skip = set() if self._policy.overwrite_assigned else (assigned or set())
        names = field_names(document_type)

        for keywords, target in LABEL_KEYWORD_RULES:
            if target in names and target not in skip:
                if all(keyword in normalized for keyword in keywords):
                    return target

        for name in names:
            if name in skip:
                continue
            candidate = normalize_label(name)
            if candidate in normalized:
                return name
            if (
                len(normalized) >= self._policy.min_reverse_match_length
                and normalized in candidate
            ):
                return name
        return None

    @staticmethod
    def average_confidence(document: ProviderDocument) -> float:
        scores = [e.confidence for e in document.entities if e.confidence is not None]
        scores += [f.confidence for f in document.form_fields if f.confidence is not None]
        if not scores:
            return 0.0
        return _clamp_confidence(sum(scores) / len(scores))

    def _assign(
        self,
        record: dict[str, Any],
        assigned: set[str],
        name: str,
        value: Any,
    ) -> None:
        coerced = _coerce_value(name, value)
        if coerced in ("", {}):
            return
        if name in assigned and not self._policy.overwrite_assigned:
            return
        record[name] = coerced
        assigned.add(name)


def _coerce_value(name: str, value: Any) -> Any:
    if value is None:
        return {} if name == RELEVANT_BOXES else ""
    if name == RELEVANT_BOXES and isinstance(value, dict):
        return value
    if isinstance(value, str):
        return value.strip()
    if isinstance(value, (dict, list)):
        return json.dumps(value, sort_keys=True)
    return str(value)


def _clamp_confidence(value: float) -> float:
    return max(0.0, min(1.0, float(value)))
