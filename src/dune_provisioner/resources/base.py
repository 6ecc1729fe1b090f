"""Base resource class for Dune resources."""

from typing import Annotated, Any, ClassVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, computed_field


def _id_to_str(v: Any) -> Any:
    """Accept identifiers as JSON numbers or strings; keep them as ``str``."""
    if isinstance(v, int) and not isinstance(v, bool):
        return str(v)
    return v


Identifier = Annotated[str | None, BeforeValidator(_id_to_str)]


class Resource(BaseModel):
    """Base class for all Dune resources.

    Resources are pure data - they define the desired state and are immutable
    once built. Handlers know how to reconcile them. Body fields are optional
    at construction so that handlers can report every missing field at once
    before touching the network.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    resource_type: ClassVar[str]
    required_fields: ClassVar[tuple[str, ...]] = ("name",)

    name: str | None = None
    is_private: bool = True

    @computed_field  # type: ignore[prop-decorator]
    @property
    def address(self) -> str:
        """Unique address for this resource (e.g., 'dune_query.revenue')."""
        return f"{self.resource_type}.{self.name}"

    def missing_fields(self) -> list[str]:
        """Required fields that are unset, null or empty."""
        missing = []
        for field in self.required_fields:
            value = getattr(self, field)
            if value is None or (isinstance(value, str) and value.strip() in {"", "null"}):
                missing.append(field)
        return missing
