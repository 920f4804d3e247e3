from storefront_auth.app.services.unit_of_work import UnitOfWork
from storefront_auth.libs.result import Result, Return


class CountUsersUseCase:
    """Admin statistics: number of registered users"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self) -> Result[int]:
        async with self.uow:
            return Return.ok(await self.uow.users.count())
