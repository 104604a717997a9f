from .bearer import BearerAuthorizer, require_bearer

__all__ = ["BearerAuthorizer", "require_bearer"]
