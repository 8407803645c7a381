from abc import ABC, abstractmethod

from libs.result import Result


class IIdentityVerifier(ABC):
    """
    External identity provider port.

    verify() returns the authenticated subject on success, or an Error with
    code INVALID_ASSERTION (provider rejected the assertion) or
    IDENTITY_PROVIDER_UNAVAILABLE (provider could not be reached).
    """

    @abstractmethod
    async def verify(self, assertion: str) -> Result[str]:
        pass
