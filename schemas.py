"""Pydantic models for data validation and structure."""

from pydantic import BaseModel, ConfigDict, Field
from typing import List, Literal, Union

RiskRating = Literal["High", "Medium", "Low"]


class RiskItem(BaseModel):
    """A single dated or risky term found in the contract."""
    point: str = Field(description="The clause, date or deadline being flagged.")
    riskRating: RiskRating = Field(description="High = significant consequences, Medium = moderate, Low = minor.")
    reason: str = Field(description="Why this rating was given.")


class ContractAnalysis(BaseModel):
    """Analysis result for a document recognised as a contract."""
    model_config = ConfigDict(populate_by_name=True)

    isContract: Literal[True] = True
    key_obligations: List[str] = Field(default_factory=list, alias="Key Obligations")
    renewal_dates: List[RiskItem] = Field(default_factory=list, alias="Renewal Dates and Deadlines")
    risks_and_penalties: List[RiskItem] = Field(default_factory=list, alias="Risks and Penalties")
    auto_renewal_clauses: List[RiskItem] = Field(default_factory=list, alias="Auto-Renewal Clauses")
    recommendations: List[str] = Field(default_factory=list, alias="Recommendations for SMEs")

    def to_dict(self):
        return self.model_dump(by_alias=True)


class NonContractResult(BaseModel):
    """Rejection returned when the document is not a contract."""
    isContract: Literal[False] = False
    analysis: str

    def to_dict(self):
        return self.model_dump()


AnalysisRecord = Union[ContractAnalysis, NonContractResult]
