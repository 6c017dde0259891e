"""
Retry engine exceptions.

RetryExhausted is raised when every allowed attempt failed with a transient
error. Fatal errors are never wrapped: they propagate unchanged on the
attempt that produced them.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bondsense.retry.metadata import RetryMetadata


class RetryExhausted(Exception):
    """
    Raised when all retry attempts fail.

    Raised `from` the last error, so the original traceback stays attached.

    Attributes:
        retry_metadata: Complete attempt history
        last_error: Error that failed the final attempt
    """

    def __init__(
        self,
        retry_metadata: "RetryMetadata",
        last_error: BaseException,
    ) -> None:
        """
        Initialize RetryExhausted exception.

        Args:
            retry_metadata: Complete attempt history
            last_error: Error from the final attempt
        """
        self.retry_metadata = retry_metadata
        self.last_error = last_error

        super().__init__(
            f"All retries exhausted after {retry_metadata.total_attempts} attempts. "
            f"Final error: {type(last_error).__name__}: {last_error}"
        )

    @property
    def message(self) -> str:
        return str(self.last_error)
