from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

DatasetName = Literal["accountIndustry", "customerType", "team"]


class DatasetRowModel(BaseModel):
    model_config = ConfigDict(extra="allow")

    count: int
    acv: float
    closed_fiscal_quarter: str


class CustomerTypeRowModel(DatasetRowModel):
    Cust_Type: str


class AccountIndustryRowModel(DatasetRowModel):
    Acct_Industry: str


class TeamRowModel(DatasetRowModel):
    Team: str


ROW_MODELS = {
    "customerType": CustomerTypeRowModel,
    "accountIndustry": AccountIndustryRowModel,
    "team": TeamRowModel,
}


class DatasetInfoModel(BaseModel):
    name: str
    title: str
    category_key: str
    category_label: str


class MetaDatasetsResponse(BaseModel):
    datasets: List[DatasetInfoModel] = Field(default_factory=list)
