"""
Typed views of the backend payloads.

The backend speaks camelCase JSON; every model accepts the wire names through
aliases and the snake_case names for construction in code. Unknown fields are
ignored so backend additions never break the UI.
"""
from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator


ADMIN_ROLE = "ADMIN"


def normalize_role(role: Any) -> str:
    """Return the bare upper-case role name ("ROLE_ADMIN" -> "ADMIN")."""
    name = str(role or "").strip().upper()
    if name.startswith("ROLE_"):
        name = name[len("ROLE_"):]
    return name


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an ISO string or a [y, m, d, h, min, s] array into a datetime."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    if isinstance(value, (list, tuple)):
        parts = [int(p) for p in value[:6]]
        while len(parts) < 3:
            parts.append(1)
        return datetime(*parts)
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return None
    return None


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class User(_WireModel):
    """User account as returned by /auth/me and /admin/users."""
    id: Optional[str] = Field(None, description="Backend user ID")
    username: str = Field("", description="Unique login name")
    first_name: str = Field("", alias="firstName")
    last_name: str = Field("", alias="lastName")
    email: str = Field("", description="Account email")
    balance: float = Field(0.0, description="Cash balance")
    roles: list[str] = Field(default_factory=list)
    enabled: bool = True
    created_at: Optional[datetime] = Field(None, alias="createdAt")
    updated_at: Optional[datetime] = Field(None, alias="updatedAt")

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value):
        return None if value is None else str(value)

    @field_validator("first_name", "last_name", "email", "username", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return "" if value is None else value

    @field_validator("balance", mode="before")
    @classmethod
    def _balance_default(cls, value):
        return 0.0 if value is None else value

    @field_validator("roles", mode="before")
    @classmethod
    def _roles_as_list(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            return [value]
        return [str(r) for r in value]

    @field_validator("created_at", "updated_at", mode="before")
    @classmethod
    def _timestamps(cls, value):
        return parse_timestamp(value)

    def has_role(self, role: str) -> bool:
        wanted = normalize_role(role)
        return any(normalize_role(r) == wanted for r in self.roles)

    @property
    def is_admin(self) -> bool:
        return self.has_role(ADMIN_ROLE)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()

    @property
    def display_name(self) -> str:
        return self.full_name or self.username


class Identity(User):
    """Authenticated user plus the bearer token issued at login."""
    token: Optional[str] = Field(None, description="JWT bearer token")
    token_type: str = Field("Bearer", alias="type")


class StockQuote(_WireModel):
    """Current market data for one stock."""
    symbol: str
    company_name: str = Field("", alias="companyName")
    sector: Optional[str] = None
    industry: Optional[str] = None
    current_price: float = Field(0.0, alias="currentPrice")
    previous_close: Optional[float] = Field(None, alias="previousClose")
    open_price: Optional[float] = Field(None, alias="openPrice")
    day_high: Optional[float] = Field(None, alias="dayHigh")
    day_low: Optional[float] = Field(None, alias="dayLow")
    last_updated: Optional[datetime] = Field(None, alias="lastUpdated")

    @field_validator("current_price", mode="before")
    @classmethod
    def _price_default(cls, value):
        return 0.0 if value is None else value

    @field_validator("last_updated", mode="before")
    @classmethod
    def _timestamp(cls, value):
        return parse_timestamp(value)

    @property
    def change(self) -> Optional[float]:
        if self.previous_close is None:
            return None
        return self.current_price - self.previous_close

    @property
    def change_percent(self) -> Optional[float]:
        if not self.previous_close:
            return None
        return self.change / self.previous_close * 100


class Portfolio(_WireModel):
    """Holdings and average purchase prices of the caller."""
    holdings: dict[str, int] = Field(default_factory=dict)
    average_prices: dict[str, float] = Field(default_factory=dict, alias="averagePrices")
    cash_balance: Optional[float] = Field(None, alias="cashBalance")

    @model_validator(mode="before")
    @classmethod
    def _unwrap(cls, data):
        # /portfolio may answer {"portfolio": {...}, "cashBalance": ...}
        if isinstance(data, dict) and isinstance(data.get("portfolio"), dict):
            merged = dict(data["portfolio"])
            if "cashBalance" in data:
                merged.setdefault("cashBalance", data["cashBalance"])
            return merged
        return data

    @field_validator("holdings", "average_prices", mode="before")
    @classmethod
    def _none_as_empty(cls, value):
        return {} if value is None else value

    def average_price(self, symbol: str) -> float:
        return float(self.average_prices.get(symbol) or 0.0)


class Transaction(_WireModel):
    """One executed trade; immutable once created."""
    id: Optional[str] = None
    type: str = Field("", description="BUY or SELL")
    stock_symbol: str = Field("", alias="stockSymbol")
    stock_name: str = Field("", alias="stockName")
    quantity: int = 0
    price_per_share: float = Field(0.0, alias="pricePerShare")
    total_amount: float = Field(0.0, alias="totalAmount")
    transaction_date: Optional[datetime] = Field(None, alias="transactionDate")
    notes: Optional[str] = None
    status: str = "COMPLETED"

    @field_validator("id", mode="before")
    @classmethod
    def _id_as_str(cls, value):
        return None if value is None else str(value)

    @field_validator("type", mode="before")
    @classmethod
    def _type_upper(cls, value):
        return str(value or "").upper()

    @field_validator("stock_name", "status", mode="before")
    @classmethod
    def _none_default(cls, value, info):
        if value is None:
            return "COMPLETED" if info.field_name == "status" else ""
        return value

    @field_validator("price_per_share", "total_amount", mode="before")
    @classmethod
    def _amount_default(cls, value):
        return 0.0 if value is None else value

    @field_validator("transaction_date", mode="before")
    @classmethod
    def _timestamp(cls, value):
        return parse_timestamp(value)

    @property
    def is_buy(self) -> bool:
        return self.type == "BUY"


class SignupForm(BaseModel):
    """Signup request body; validated before it is sent."""
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    username: str = Field(..., min_length=1, description="Login name")
    email: EmailStr = Field(..., description="Account email")
    password: str = Field(..., min_length=1)
    first_name: str = Field(..., min_length=1, alias="firstName")
    last_name: str = Field(..., min_length=1, alias="lastName")

    def to_payload(self) -> dict:
        return self.model_dump(by_alias=True)
