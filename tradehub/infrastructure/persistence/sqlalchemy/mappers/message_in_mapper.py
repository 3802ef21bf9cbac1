"""MessageInMapper - converts between InboundMessage entity and MessageInModel ORM.

Mapper pattern: Domain entity ↔ ORM model conversion.
Keeps the domain layer free of SQLAlchemy.
"""

from tradehub.domain.messages.entities import InboundMessage
from tradehub.infrastructure.persistence.sqlalchemy.models import MessageInModel


class MessageInMapper:
    """Mapper for InboundMessage entity ↔ MessageInModel ORM.

    Example:
        >>> mapper = MessageInMapper()
        >>> model = await session.get(MessageInModel, 42)
        >>> message = mapper.to_entity(model)
        >>> message.mark_parsed()
        >>> mapper.update_parse_state(message, model)
    """

    def to_entity(self, model: MessageInModel) -> InboundMessage:
        """Convert MessageInModel (ORM) → InboundMessage (domain entity)."""
        return InboundMessage(
            id=model.message_in_id,
            source_type=model.source_type,
            source_venue_code=model.source_venue_code,
            session_key=model.session_key,
            received_utc=model.received_utc,
            source_timestamp=model.source_timestamp,
            is_admin=model.is_admin,
            parsed_flag=model.parsed_flag,
            parsed_utc=model.parsed_utc,
            parse_error=model.parse_error,
            raw_payload=model.raw_payload,
            email_subject=model.email_subject,
            email_from=model.email_from,
            email_to=model.email_to,
            fix_msg_type=model.fix_msg_type,
            fix_seq_num=model.fix_seq_num,
            external_counterparty_name=model.external_counterparty_name,
            external_trade_key=model.external_trade_key,
        )

    def to_model(self, entity: InboundMessage) -> MessageInModel:
        """Convert InboundMessage (domain entity) → MessageInModel (ORM)."""
        return MessageInModel(
            message_in_id=entity.id,
            source_type=entity.source_type,
            source_venue_code=entity.source_venue_code,
            session_key=entity.session_key,
            received_utc=entity.received_utc,
            source_timestamp=entity.source_timestamp,
            is_admin=entity.is_admin,
            parsed_flag=entity.parsed_flag,
            parsed_utc=entity.parsed_utc,
            parse_error=entity.parse_error,
            raw_payload=entity.raw_payload,
            email_subject=entity.email_subject,
            email_from=entity.email_from,
            email_to=entity.email_to,
            fix_msg_type=entity.fix_msg_type,
            fix_seq_num=entity.fix_seq_num,
            external_counterparty_name=entity.external_counterparty_name,
            external_trade_key=entity.external_trade_key,
        )

    def update_parse_state(self, entity: InboundMessage, model: MessageInModel) -> None:
        """Copy only the parse-state columns onto an existing model.

        The raw payload and source metadata are owned by ingestion and are
        never rewritten by the parse pipeline.
        """
        model.parsed_flag = entity.parsed_flag
        model.parsed_utc = entity.parsed_utc
        model.parse_error = entity.parse_error
