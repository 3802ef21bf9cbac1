"""ReferenceDataMapper - lookup table rows → reference data value objects."""

from tradehub.domain.trading.value_objects import BrokerMapping, ExpiryCutRule
from tradehub.infrastructure.persistence.sqlalchemy.models import (
    BrokerMappingModel,
    ExpiryCutRuleModel,
)


class ReferenceDataMapper:
    """Read-only mapper for lookup tables."""

    def expiry_cut_to_value(self, model: ExpiryCutRuleModel) -> ExpiryCutRule:
        return ExpiryCutRule(
            currency_pair=model.currency_pair,
            expiry_cut=model.expiry_cut,
            is_active=model.is_active,
        )

    def broker_mapping_to_value(self, model: BrokerMappingModel) -> BrokerMapping:
        return BrokerMapping(
            source_venue_code=model.source_venue_code,
            external_broker_code=model.external_broker_code,
            normalized_broker_code=model.normalized_broker_code,
            is_active=model.is_active,
        )
