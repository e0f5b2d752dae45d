"""Cukai MCP Server - FastMCP implementation for tax computation tools."""

import logging
from datetime import date
from typing import Any, Optional

from mcp.server.fastmcp import FastMCP
from pydantic import Field

from cukai.sdk import next_filing_period, periods_back
from cukai.sdk.dates import normalize_date
from cukai.sdk.taxes import (
    CategoryRulesError,
    compute_claimable,
    compute_ea_summary,
    get_category,
    invoices_in_period,
    sst_payable as sdk_sst_payable,
)

logger = logging.getLogger(__name__)

# Initialize FastMCP server
mcp = FastMCP("cukai")


# --- Tools ---

@mcp.tool()
async def compute_claimable_amount(
    category_id: str = Field(description="Deduction category id (e.g., 'computers', 'epf')"),
    amount: float = Field(description="Raw expense amount in RM"),
) -> dict[str, Any]:
    """Compute the claimable amount and percent of a deduction from its category rule."""
    try:
        category = get_category(category_id)
    except CategoryRulesError as e:
        logger.error(f"compute_claimable_amount failed: {e}")
        return {"success": False, "error": str(e)}

    result = compute_claimable(category, amount)
    data = {"success": True, "category_id": category_id, "verified": category is not None}
    data.update(result.to_dict())
    return data


@mcp.tool()
async def sst_payable(
    invoices: list[dict[str, Any]] = Field(description="Invoices with 'amount' and 'invoice_date' (DD/MM/YYYY or ISO)"),
    period_start: str = Field(description="Period start date (YYYY-MM-DD)"),
    period_end: str = Field(description="Period end date (YYYY-MM-DD)"),
) -> dict[str, Any]:
    """Compute SST payable (6%) for invoices dated within a period, inclusive."""
    if normalize_date(period_start) is None or normalize_date(period_end) is None:
        return {"success": False, "error": f"Invalid period: {period_start} - {period_end}"}

    selected = invoices_in_period(invoices, period_start, period_end)
    return {
        "success": True,
        "invoice_count": len(selected),
        "sst_payable": sdk_sst_payable(invoices, period_start, period_end),
    }


@mcp.tool()
async def ea_summary(
    record: dict[str, Any] = Field(description="EA record with remuneration and statutory deduction fields"),
) -> dict[str, Any]:
    """Compute total remuneration and net employment income for one EA record."""
    return {"success": True, **compute_ea_summary(record).to_dict()}


@mcp.tool()
async def filing_periods(
    count: int = Field(default=6, description="Number of monthly periods to list"),
    today: Optional[str] = Field(default=None, description="Reference date (YYYY-MM-DD); defaults to today"),
) -> dict[str, Any]:
    """List recent SST taxable periods, newest first, starting at the next open period."""
    ref_date = normalize_date(today) if today else date.today()
    if ref_date is None:
        return {"success": False, "error": f"Invalid date: {today}"}

    ref = next_filing_period(ref_date)
    return {
        "success": True,
        "periods": [p.to_dict() for p in periods_back(count, ref.year, ref.month)],
    }


def run_server():
    """Run the MCP server in stdio mode."""
    mcp.run(transport="stdio")


if __name__ == "__main__":
    run_server()
