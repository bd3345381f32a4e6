from fastapi import status


class QuoteError(Exception):
    """
    Base for every failure the quote endpoints report to the caller.
    `code` is the stable machine name, `message` is what the form shows.
    """
    code = "QuoteError"
    message = "Something went wrong."
    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)

    def to_body(self) -> dict:
        return {"error": self.message, "code": self.code}


# -------------------------------------------------------------------
# Validation failures (400)
# -------------------------------------------------------------------

class ValidationFailure(QuoteError):
    pass


class MalformedRequest(ValidationFailure):
    code = "MalformedRequest"
    message = "Invalid JSON body."


class MissingAddress(ValidationFailure):
    code = "MissingAddress"
    message = "Missing address."


class MissingName(ValidationFailure):
    code = "MissingName"
    message = "Missing name."


class MissingPhone(ValidationFailure):
    code = "MissingPhone"
    message = "Invalid phone number."


class InvalidPhone(ValidationFailure):
    code = "InvalidPhone"
    message = "Invalid phone number."


class MissingService(ValidationFailure):
    code = "MissingService"
    message = "Missing service."


class InvalidSize(ValidationFailure):
    code = "InvalidSize"
    message = "Invalid size."


class InvalidCondition(ValidationFailure):
    code = "InvalidCondition"
    message = "Invalid condition."


# -------------------------------------------------------------------
# Lookup + storage
# -------------------------------------------------------------------

class NotFound(QuoteError):
    code = "NotFound"
    message = "Quote not found."
    status_code = status.HTTP_404_NOT_FOUND


class StorageFailure(QuoteError):
    code = "StorageFailure"
    message = "Could not save quote."
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class DuplicateQuoteId(StorageFailure):
    code = "DuplicateQuoteId"
