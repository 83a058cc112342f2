from pydantic import BaseModel, ConfigDict, Field, model_validator


class ProjectRules(BaseModel):
    slug: str = "gigledger"
    rules_version: str = "1"

class ClientMatchingRules(BaseModel):
    max_distance_ratio: float = Field(default=0.3, ge=0.0)
    suffixes: list[str] = Field(
        default_factory=lambda: ["ab", "aktiebolag", "hb", "kb"]
    )

    # Ranked (review) matching
    fuzzy_accept: float = Field(default=0.85, ge=0.0, le=1.0)
    fuzzy_suggest: float = Field(default=0.7, ge=0.0, le=1.0)
    token_accept: float = Field(default=0.7, ge=0.0, le=1.0)
    token_suggest: float = Field(default=0.5, ge=0.0, le=1.0)
    token_similarity: float = Field(default=0.8, ge=0.0, le=1.0)
    max_suggestions: int = Field(default=3, ge=0)
    max_manual_suggestions: int = Field(default=5, ge=0)
    stop_words: list[str] = Field(
        default_factory=lambda: ["ab", "hb", "kb", "the", "i", "of", "and", "för", "och"]
    )

class ExpenseDedupeRules(BaseModel):
    supplier_threshold: float = Field(default=0.7, ge=0.0, le=1.0)
    suffixes: list[str] = Field(
        default_factory=lambda: [
            "pbc", "ab", "hb", "kb", "inc", "llc", "ltd", "gmbh", "as", "oy", "a/s",
        ]
    )

class RateLimitWindow(BaseModel):
    limit: int = Field(ge=0)
    window_seconds: float = Field(gt=0)

    @property
    def window_ms(self) -> int:
        # Nearest millisecond, never zero for a positive window
        return max(1, round(self.window_seconds * 1000))

class RateLimitRules(BaseModel):
    sweep_interval_seconds: float = Field(default=300, gt=0)
    policies: dict[str, RateLimitWindow] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _policy_names(self) -> "RateLimitRules":
        for name in self.policies:
            if not name or ":" in name:
                raise ValueError(f"invalid rate limit policy name: {name!r}")
        return self

class Rules(BaseModel):
    model_config = ConfigDict(extra="forbid")

    project: ProjectRules = Field(default_factory=ProjectRules)
    client_matching: ClientMatchingRules = Field(default_factory=ClientMatchingRules)
    expense_dedupe: ExpenseDedupeRules = Field(default_factory=ExpenseDedupeRules)
    rate_limits: RateLimitRules = Field(default_factory=RateLimitRules)
