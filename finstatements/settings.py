from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables (FS_ prefix) or .env file."""
    model_config = SettingsConfigDict(env_prefix="FS_", env_file=".env", extra="ignore")

    input_file: str = Field(default="data/trial_balance.xlsx")
    sheet_name: str = Field(default="")
    output_dir: str = Field(default="data/output")
    excel_file_name: str = Field(default="Financial_Statements.xlsx")
    pdf_file_name: str = Field(default="Financial_Statements.pdf")
    company_name: str = Field(default="Financial Statements")
    current_period_label: str = Field(default="As at 31 March 2024")
    previous_period_label: str = Field(default="As at 31 March 2023")
    amount_unit: Literal["lakhs", "rupees"] = Field(default="lakhs")
    log_level: str = Field(default="INFO")


settings = Settings()
