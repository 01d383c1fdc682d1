from pydantic import AnyUrl, BaseModel, TypeAdapter, ValidationError, field_validator

_url_adapter = TypeAdapter(AnyUrl)

# Request DTOs
class URLCreateRequest(BaseModel):
    # Kept as the submitted string; AnyUrl would normalise it (e.g. trailing slash)
    # and break idempotent lookups by original_url.
    url: str

    @field_validator('url')
    def validate_url(cls, v):
        if not v or not v.strip():
            raise ValueError('URL is required')
        try:
            _url_adapter.validate_python(v)
        except ValidationError:
            raise ValueError('Invalid URL format')
        return v
