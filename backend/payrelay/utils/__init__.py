from payrelay.utils.extractors import (
    extract_account_name, extract_token, first_present, is_collection_successful,
)

__all__ = ["extract_account_name", "extract_token", "first_present", "is_collection_successful"]
