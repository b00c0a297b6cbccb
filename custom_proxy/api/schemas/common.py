from typing import ClassVar, List, Optional

from pydantic import BaseModel, ConfigDict

from custom_proxy.api.errors import MissingFieldsError


class ProxyRequest(BaseModel):
    """
    Base for request bodies. Fields are optional at parse time so that a
    missing value becomes a 400 with a fixed message rather than a 422.
    """
    model_config = ConfigDict(populate_by_name=True)

    required_fields: ClassVar[tuple] = ()
    missing_message: ClassVar[str] = "Please provide all required fields in the request body"

    def missing_fields(self) -> List[str]:
        return [name for name in self.required_fields if not getattr(self, name)]

    def ensure_complete(self) -> None:
        if self.missing_fields():
            raise MissingFieldsError(self.missing_message)

    @classmethod
    def require(cls, req: Optional["ProxyRequest"]):
        """Validate ``req``; an absent or null body counts as every field missing."""
        if req is None:
            raise MissingFieldsError(cls.missing_message)
        req.ensure_complete()
        return req


class ProxyResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)
