"""Rule catalog endpoint.

Routes:
  GET /rules  every performance rule the analyzer checks, in catalog order
"""

from fastapi import APIRouter

from perfpilot.rules import PERFORMANCE_RULES

router = APIRouter(prefix="/rules", tags=["rules"])


@router.get("")
async def list_rules() -> dict:
    """Return the rule catalog so clients can render rule details and docs links."""
    return {
        "rules": [rule.to_dict() for rule in PERFORMANCE_RULES],
        "count": len(PERFORMANCE_RULES),
    }
