from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from taxdocs.documents.models import Document, DocumentType, ProcessingStatus
from taxdocs.scenarios.models import (
    DeductionComparison,
    DeductionMethod,
    DeductionScenario,
    DeductionType,
    Dependent,
    FilingStatus,
    ScenarioReport,
    ScenarioResult,
)


class CamelModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, allow_inf_nan=False
    )


class DocumentOut(CamelModel):
    id: str
    tax_return_id: str
    file_name: str
    mime_type: str
    byte_size: int
    document_type: DocumentType
    processing_status: ProcessingStatus
    ocr_text: str | None = None
    extracted_data: dict[str, Any] | None = None
    created_at: datetime | None = None

    @classmethod
    def from_document(cls, document: Document) -> "DocumentOut":
        return cls(
            id=document.id,
            tax_return_id=document.tax_return_id,
            file_name=document.file_name,
            mime_type=document.mime_type,
            byte_size=document.byte_size,
            document_type=document.document_type,
            processing_status=document.processing_status,
            ocr_text=document.ocr_text,
            extracted_data=document.extracted_data,
            created_at=document.created_at,
        )


class DependentIn(CamelModel):
    name: str = ""
    age: int | None = None
    relationship: str | None = None

    def to_domain(self) -> Dependent:
        return Dependent(name=self.name, age=self.age, relationship=self.relationship)


class ScenarioIn(CamelModel):
    name: str = Field(min_length=1)
    additional_amount: float
    deduction_type: DeductionType = DeductionType.OTHER_DEDUCTIONS

    def to_domain(self) -> DeductionScenario:
        return DeductionScenario(
            name=self.name,
            additional_amount=self.additional_amount,
            deduction_type=self.deduction_type,
        )


class WhatIfRequest(CamelModel):
    adjusted_gross_income: float = 0
    filing_status: FilingStatus = FilingStatus.SINGLE
    current_itemized_deductions: float = 0
    dependents: list[DependentIn] = Field(default_factory=list)
    scenarios: list[ScenarioIn] = Field(default_factory=list)
    quick_amount: float | None = None


class ComparisonOut(CamelModel):
    standard_deduction: float
    itemized_deduction: float
    standard_tax: float
    itemized_tax: float
    credits: float
    recommended: DeductionMethod
    deduction_used: float
    taxable_income: float
    tax_liability: float
    effective_rate: float
    marginal_rate: float

    @classmethod
    def from_comparison(cls, comparison: DeductionComparison) -> "ComparisonOut":
        return cls(
            standard_deduction=comparison.standard_deduction,
            itemized_deduction=comparison.itemized_deduction,
            standard_tax=comparison.standard_tax,
            itemized_tax=comparison.itemized_tax,
            credits=comparison.credits,
            recommended=comparison.recommended,
            deduction_used=comparison.deduction_used,
            taxable_income=comparison.taxable_income,
            tax_liability=comparison.tax_liability,
            effective_rate=comparison.effective_rate,
            marginal_rate=comparison.marginal_rate,
        )


class ScenarioResultOut(CamelModel):
    name: str
    description: str
    deduction_type: DeductionType
    additional_amount: float
    comparison: ComparisonOut
    savings: float

    @classmethod
    def from_result(cls, result: ScenarioResult) -> "ScenarioResultOut":
        return cls(
            name=result.scenario.name,
            description=result.scenario.description,
            deduction_type=result.scenario.deduction_type,
            additional_amount=result.scenario.additional_amount,
            comparison=ComparisonOut.from_comparison(result.comparison),
            savings=result.savings,
        )


class WhatIfResponse(CamelModel):
    adjusted_gross_income: float
    filing_status: FilingStatus
    baseline: ComparisonOut
    scenarios: list[ScenarioResultOut]
    best_scenario: str | None = None

    @classmethod
    def from_report(cls, report: ScenarioReport) -> "WhatIfResponse":
        best = report.best
        return cls(
            adjusted_gross_income=report.baseline.adjusted_gross_income,
            filing_status=report.baseline.filing_status,
            baseline=ComparisonOut.from_comparison(report.baseline),
            scenarios=[ScenarioResultOut.from_result(r) for r in report.results],
            best_scenario=best.scenario.name if best is not None and best.savings > 0 else None,
        )
