import os
from decimal import Decimal
from typing import Dict

from pydantic import BaseModel


class BillingConfig(BaseModel):
    default_hourly_rate: Decimal = Decimal("65.00")
    tax_rates_by_jurisdiction: Dict[str, Decimal] = {"QC": Decimal("0.14975")}
    default_jurisdiction: str = "QC"
    payment_terms_days: int = 30
    invoice_number_prefix: str = "INV-"

    def tax_rate_for(self, jurisdiction: str | None) -> Decimal:
        code = jurisdiction or self.default_jurisdiction
        if code in self.tax_rates_by_jurisdiction:
            return self.tax_rates_by_jurisdiction[code]
        return self.tax_rates_by_jurisdiction[self.default_jurisdiction]


class Settings:
    def __init__(self):
        self.app_name = "Wyatt Billing"
        self.api_version = "1.0.0"
        self.environment = os.getenv("WYATT_ENV", "development")
        self.secret_key = os.getenv("WYATT_SECRET_KEY", "CHANGE_ME")
        self.access_token_expire_minutes = int(os.getenv("WYATT_ACCESS_TOKEN_EXPIRE_MINUTES", "30"))
        self.database_url = os.getenv("WYATT_DATABASE_URL", "sqlite:///./wyatt.db")
        self.log_level = os.getenv("WYATT_LOG_LEVEL", "INFO")
        self.default_hourly_rate = Decimal(os.getenv("WYATT_DEFAULT_HOURLY_RATE", "65.00"))
        self.default_jurisdiction = os.getenv("WYATT_DEFAULT_JURISDICTION", "QC")
        self.tax_rates_by_jurisdiction = {"QC": Decimal("0.14975"), "ON": Decimal("0.13")}
        self.payment_terms_days = int(os.getenv("WYATT_PAYMENT_TERMS_DAYS", "30"))

    def billing_config(self) -> BillingConfig:
        return BillingConfig(
            default_hourly_rate=self.default_hourly_rate,
            tax_rates_by_jurisdiction=self.tax_rates_by_jurisdiction,
            default_jurisdiction=self.default_jurisdiction,
            payment_terms_days=self.payment_terms_days,
        )


_settings_instance = None


def get_settings():
    """Return a singleton Settings instance."""
    global _settings_instance
    if _settings_instance is None:
        _settings_instance = Settings()
    return _settings_instance


def get_billing_config() -> BillingConfig:
    return get_settings().billing_config()
