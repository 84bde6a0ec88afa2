from fastapi import APIRouter, Depends

from taxdocs.api.auth import CurrentUser, get_current_user
from taxdocs.api.schemas import WhatIfRequest, WhatIfResponse
from taxdocs.scenarios.calculator import calculate_scenarios, quick_scenario

router = APIRouter(prefix="/api/scenarios", tags=["scenarios"])


@router.post("/what-if", response_model=WhatIfResponse)
def what_if(
    body: WhatIfRequest,
    _: CurrentUser = Depends(get_current_user),
) -> WhatIfResponse:
    scenarios = [s.to_domain() for s in body.scenarios]
    if body.quick_amount is not None:
        scenarios.append(quick_scenario(body.quick_amount))

    report = calculate_scenarios(
        body.adjusted_gross_income,
        body.filing_status,
        body.current_itemized_deductions,
        [d.to_domain() for d in body.dependents],
        scenarios,
    )
    return WhatIfResponse.from_report(report)
