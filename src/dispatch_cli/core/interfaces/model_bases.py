"""Nominal marker base classes for model standardization.

`DomainModel` is the base for Pydantic-based configuration and agent-facing
models; plain dataclasses are used for per-invocation values.
"""

from __future__ import annotations

from pydantic import BaseModel


class DomainModel(BaseModel):
    """Nominal marker for Pydantic-based domain and API models."""

    def __repr__(self) -> str:
        """Provide a concise, one-line summary of the object."""
        class_name = self.__class__.__name__

        # Common identifiers are 'name' or 'app_name'
        for attr in ("name", "app_name"):
            if hasattr(self, attr):
                attr_value = getattr(self, attr)
                if attr_value is not None:
                    return f'<{class_name} {attr}="{attr_value}">'

        # Never dump field values; settings may hold credentials
        return f"<{class_name}>"
