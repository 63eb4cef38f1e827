"""Portfolio and money-management data models."""

from pydantic import BaseModel, Field


class PortfolioSettings(BaseModel):
    """Account-wide settings, overwritten in place."""

    initial_balance: float = Field(..., description="Starting balance of the account")


class SizingResult(BaseModel):
    """Output of the position-sizing calculator."""

    risk_amount: float = Field(..., description="Currency amount at risk")
    position_size: float = Field(..., description="Recommended lot/size")
    reward_risk_ratio: float = Field(..., ge=0, description="Take-profit over stop-loss distance")
    potential_profit: float = Field(..., description="Profit if take-profit is hit")

    model_config = {"frozen": True}


class PortfolioSummary(BaseModel):
    """Aggregated statistics over a set of trade records."""

    total_pnl: float = Field(..., description="Net P&L")
    current_balance: float = Field(..., description="Initial balance plus net P&L")
    win_rate: int = Field(..., ge=0, le=100, description="Win rate percentage, whole number")
    growth_percent: float = Field(..., description="Growth against initial balance")
    total_trades: int = Field(..., ge=0, description="Number of trades")
    wins: int = Field(default=0, ge=0, description="Winning trades")
    losses: int = Field(default=0, ge=0, description="Losing trades")
    breakeven: int = Field(default=0, ge=0, description="Break-even trades")
    pending: int = Field(default=0, ge=0, description="Open trades")

    model_config = {"frozen": True}


class HistorySummary(BaseModel):
    """Statistics reported for a filtered history view."""

    total_pnl: float = Field(..., description="Net P&L of the filtered trades")
    win_rate: int = Field(..., ge=0, le=100, description="Win rate of the filtered trades")
    total_trades: int = Field(..., ge=0, description="Number of filtered trades")

    model_config = {"frozen": True}
