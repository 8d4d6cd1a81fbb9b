from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    """Standard error response format."""

    message: str = Field(..., description="Human-readable error message")
    type: str = Field(..., description="Machine-readable error type")

    model_config = {
        "json_schema_extra": {
            "examples": [
                {"message": "Missing pod_name query parameter", "type": "validation_error"},
                {"message": "Pod 'job-1' not found in namespace 'default'", "type": "not_found"},
                {"message": "Invalid active-jobs label value: 'abc'", "type": "corrupt_counter"},
            ]
        }
    }
