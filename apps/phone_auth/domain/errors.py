from __future__ import annotations


class PhoneAuthError(RuntimeError):
    pass


class StorageError(PhoneAuthError):
    pass


class DeliveryError(PhoneAuthError):
    def __init__(self, message: str = "Failed to deliver OTP.", *, phone: str | None = None):
        super().__init__(message)
        self.phone = phone


class DirectoryError(PhoneAuthError):
    pass


class DirectoryInconsistencyError(DirectoryError):
    def __init__(self, message: str = "Customer not found.", *, user_id: int | None = None):
        super().__init__(message)
        self.user_id = user_id
