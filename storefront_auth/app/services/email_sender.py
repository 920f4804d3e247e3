from abc import ABC, abstractmethod


class IEmailSender(ABC):
    """Outbound email capability used by the password reset flow"""

    @abstractmethod
    async def send_password_reset_otp(self, to_email: str, otp: int) -> bool:
        """
        Deliver a password reset code.

        Returns True if the message was handed off, False on transport failure.
        Implementations must not raise for delivery errors.
        """
        pass
