"""SQLAlchemyMessageInRepository - implements MessageInRepository port."""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from tradehub.domain.messages.entities import InboundMessage
from tradehub.domain.messages.repositories import MessageInRepository
from tradehub.domain.shared import AggregateNotFound
from tradehub.infrastructure.persistence.sqlalchemy.mappers import MessageInMapper
from tradehub.infrastructure.persistence.sqlalchemy.models import MessageInModel


class SQLAlchemyMessageInRepository(MessageInRepository):
    """SQLAlchemy implementation of MessageInRepository.

    Example:
        >>> async with session_factory() as session:
        ...     repo = SQLAlchemyMessageInRepository(session)
        ...     pending = await repo.get_unparsed_messages(100)
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository.

        Args:
            session: SQLAlchemy async session.
        """
        self._session = session
        self._mapper = MessageInMapper()

    async def insert_message_in(self, message: InboundMessage) -> int:
        if message.id is not None:
            raise ValueError(f"MessageIn {message.id} is already stored")

        model = self._mapper.to_model(message)
        self._session.add(model)
        await self._session.flush()  # Get ID
        message._id = model.message_in_id  # Set ID back to entity
        return model.message_in_id

    async def get_by_id(self, message_in_id: int) -> InboundMessage | None:
        model = await self._session.get(MessageInModel, message_in_id)
        if model is None:
            return None
        return self._mapper.to_entity(model)

    async def get_unparsed_messages(self, max_count: int) -> list[InboundMessage]:
        """Get unparsed messages, oldest first.

        Args:
            max_count: Maximum number of messages.

        Returns:
            List of messages with parsed_flag = false.
        """
        stmt = (
            select(MessageInModel)
            .where(MessageInModel.parsed_flag.is_(False))
            .order_by(MessageInModel.message_in_id.asc())
            .limit(max_count)
        )

        result = await self._session.execute(stmt)
        models = result.scalars().all()
        return [self._mapper.to_entity(model) for model in models]

    async def update_parsing_state(self, message: InboundMessage) -> None:
        model = None
        if message.id is not None:
            model = await self._session.get(MessageInModel, message.id)
        if model is None:
            raise AggregateNotFound("MessageIn not found", message_in_id=message.id)

        self._mapper.update_parse_state(message, model)
        await self._session.flush()
