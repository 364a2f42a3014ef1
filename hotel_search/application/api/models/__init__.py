from hotel_search.application.api.models.envelope import ErrorResponse, SuccessResponse, envelope

__all__ = ["ErrorResponse", "SuccessResponse", "envelope"]
