"""Crime grade HTTP client for looking up a property's risk grade"""

import httpx
from loan_gateway.domain.exceptions import CrimeGradeAPIError
from loan_gateway.config import settings


class CrimeGradeClient:
    """Client for the external crime grade API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url or settings.crime_api_base
        self.timeout = timeout or settings.crime_api_timeout_seconds
        self.transport = transport

    async def get_grade(self, normalized_address: str) -> str:
        """
        Fetch the raw crime grade for an address.

        The returned letter is not validated here; callers upper-case and
        check it against A-F.

        Raises:
            CrimeGradeAPIError: On timeout, network or HTTP errors, or a response without a grade
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(
                    f"{self.base_url}/api/grade",
                    params={"address": normalized_address},
                    headers={"User-Agent": "LoanGateway/1.0"},
                )
                response.raise_for_status()
                data = response.json()

                grade = data["grade"]
                if not isinstance(grade, str) or not grade:
                    raise ValueError(f"grade must be a non-empty string, got {grade!r}")
                return grade

            except httpx.TimeoutException as e:
                raise CrimeGradeAPIError(f"Crime grade API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise CrimeGradeAPIError(f"Crime grade API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise CrimeGradeAPIError(f"Crime grade API unreachable: {e}") from e
            except (KeyError, ValueError, TypeError) as e:
                raise CrimeGradeAPIError(f"Invalid crime grade response: {e}") from e
