from typing import Dict, Optional
from pydantic import BaseModel, Field

class ValidationResult(BaseModel):
    field_errors: Dict[str, str] = Field(default_factory=dict)
    # non-blocking; the caller decides whether to proceed
    conflict_warning: Optional[str] = None

    @property
    def ok(self) -> bool:
        return not self.field_errors
