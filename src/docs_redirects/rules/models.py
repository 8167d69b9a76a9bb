from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from docs_redirects.components.build import (
    BuildRedirectsInput,
    HostTarget,
    InvalidTargetPathError,
    validate_target_path,
)
from docs_redirects.components.canonical import CanonicalPathPolicy, TrailingSlash
from docs_redirects.components.redirects import RedirectRule

Platform = Literal["json", "netlify", "vercel"]


class RedirectDeclaration(BaseModel):
    from_paths: list[str] = Field(alias="from")
    to: str

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    @field_validator("from_paths", mode="before")
    @classmethod
    def _single_source(cls, value: object) -> object:
        # `from` accepts a single path or a list of paths
        if isinstance(value, str):
            return [value]
        return value

    def to_rule(self) -> RedirectRule:
        return RedirectRule.of(self.from_paths, self.to)


class TargetRules(BaseModel):
    platform: Platform
    path: str

    @field_validator("path")
    @classmethod
    def _inside_output_dir(cls, value: str) -> str:
        try:
            validate_target_path(value)
        except InvalidTargetPathError as e:
            raise ValueError(e.reason) from e
        return value


class RedirectRules(BaseModel):
    trailing_slash: TrailingSlash = TrailingSlash.STRIPPED
    max_hops: int = Field(default=2, ge=1)
    on_missing_destination: Literal["ignore", "warn", "error"] = "warn"
    base_url: str = ""
    redirects: list[RedirectDeclaration] = Field(default_factory=list)
    targets: list[TargetRules] = Field(default_factory=list)

    @property
    def policy(self) -> CanonicalPathPolicy:
        return CanonicalPathPolicy(trailing_slash=self.trailing_slash)

    def to_rules(self) -> tuple[RedirectRule, ...]:
        return tuple(declaration.to_rule() for declaration in self.redirects)

    def to_build_input(self, write_stubs: bool = True) -> BuildRedirectsInput:
        return BuildRedirectsInput(
            rules=self.to_rules(),
            policy=self.policy,
            max_hops=self.max_hops,
            on_missing_destination=self.on_missing_destination,
            base_url=self.base_url,
            targets=tuple(HostTarget(platform=t.platform, path=t.path) for t in self.targets),
            write_stubs=write_stubs,
        )
