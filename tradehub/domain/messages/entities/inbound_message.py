"""InboundMessage Entity - one staged raw message awaiting interpretation.

Created by the upstream ingestion side (mail poller, FIX drop copy, file
import). The parse pipeline mutates it exactly once per attempt: either
``mark_parsed`` or ``mark_failed`` followed by a parse-state writeback.
"""

from datetime import datetime, timezone

from tradehub.domain.shared import BusinessRuleViolation, Entity


class InboundMessage(Entity):
    """Staged inbound message (mail, FIX, API, file).

    Business Rules:
    - A parsed message is never picked up again by the batch puller
    - A failure is terminal per attempt: parsed_flag is set together with the error
    - parsed_utc is set whenever parsed_flag is set

    Example:
        >>> message = InboundMessage(
        ...     source_type="FIX",
        ...     source_venue_code="VOLBROKER",
        ...     received_utc=datetime.now(timezone.utc),
        ...     raw_payload="8=FIX.4.4|35=AE|...",
        ...     fix_msg_type="AE",
        ... )
        >>> message.mark_failed("No parser available for this message.")
        >>> message.parsed_flag
        True
    """

    def __init__(
        self,
        *,
        id: int | None = None,
        source_type: str,
        source_venue_code: str = "",
        received_utc: datetime,
        raw_payload: str = "",
        session_key: str | None = None,
        source_timestamp: datetime | None = None,
        is_admin: bool = False,
        parsed_flag: bool = False,
        parsed_utc: datetime | None = None,
        parse_error: str | None = None,
        email_subject: str | None = None,
        email_from: str | None = None,
        email_to: str | None = None,
        fix_msg_type: str | None = None,
        fix_seq_num: int | None = None,
        external_counterparty_name: str | None = None,
        external_trade_key: str | None = None,
    ) -> None:
        """Initialize InboundMessage entity.

        Args:
            id: Message id (None until staged).
            source_type: MAIL, FIX, API or FILE.
            source_venue_code: Venue / sender code (e.g. VOLBROKER).
            received_utc: When the ingestion side received the message.
            raw_payload: Raw message text.
            session_key: FIX session or mailbox key.
            source_timestamp: Timestamp stated by the source, if any.
            is_admin: True for session-level/admin messages.
            parsed_flag: Whether a parse attempt has completed.
            parsed_utc: When the parse attempt completed.
            parse_error: Diagnostic of a failed attempt (None on success).
            email_subject: Mail subject (MAIL sources).
            email_from: Mail sender (MAIL sources).
            email_to: Mail recipient (MAIL sources).
            fix_msg_type: FIX MsgType (tag 35), e.g. AE.
            fix_seq_num: FIX MsgSeqNum (tag 34).
            external_counterparty_name: Counterparty as named by the source.
            external_trade_key: Trade key as named by the source.
        """
        super().__init__(id=id)
        self.source_type = source_type
        self.source_venue_code = source_venue_code
        self.session_key = session_key
        self.received_utc = received_utc
        self.source_timestamp = source_timestamp
        self.is_admin = is_admin
        self.parsed_flag = parsed_flag
        self.parsed_utc = parsed_utc
        self.parse_error = parse_error
        self.raw_payload = raw_payload
        self.email_subject = email_subject
        self.email_from = email_from
        self.email_to = email_to
        self.fix_msg_type = fix_msg_type
        self.fix_seq_num = fix_seq_num
        self.external_counterparty_name = external_counterparty_name
        self.external_trade_key = external_trade_key

    @property
    def can_process(self) -> bool:
        """True while no parse attempt has completed for this message."""
        return not self.parsed_flag

    @property
    def parse_succeeded(self) -> bool:
        """True if the message was parsed without error."""
        return self.parsed_flag and self.parse_error is None

    def mark_parsed(self, now: datetime | None = None) -> None:
        """Record a successful parse attempt."""
        self.parsed_flag = True
        self.parsed_utc = now or datetime.now(timezone.utc)
        self.parse_error = None

    def mark_failed(self, error: str, now: datetime | None = None) -> None:
        """Record a failed parse attempt.

        Args:
            error: Diagnostic text stored on the message. Must not be blank.
            now: Completion time (defaults to current UTC time).

        Raises:
            BusinessRuleViolation: If error is blank.
        """
        if not error or not error.strip():
            raise BusinessRuleViolation(
                "Parse failure requires a diagnostic", message_in_id=self.id
            )

        self.parsed_flag = True
        self.parsed_utc = now or datetime.now(timezone.utc)
        self.parse_error = error

    def __repr__(self) -> str:
        return (
            f"InboundMessage(id={self.id}, source_type={self.source_type}, "
            f"venue={self.source_venue_code}, parsed={self.parsed_flag})"
        )
