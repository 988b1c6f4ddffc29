from protean.domain import Domain
from sqlalchemy import create_engine


def _is_rdbms(provider) -> bool:
    return provider.conn_info["provider"] in ("sqlite", "postgresql")


def setup_db(domain: Domain):
    """Create tables for products, inventory logs and alerts"""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if not _is_rdbms(provider):
                continue

            engine = create_engine(provider.conn_info["database_uri"])

            # Accessing `_dao` forces the SQLAlchemy model to be built and
            # registered with the provider's metadata before `create_all`.
            for _, aggregate_record in domain.registry.aggregates.items():
                if aggregate_record.cls.meta_.provider == provider.name:
                    domain.repository_for(aggregate_record.cls)._dao  # noqa: B018

            provider._metadata.create_all(engine)


def drop_db(domain: Domain):
    """Drop all tables"""
    with domain.domain_context():
        for _, provider in domain.providers.items():
            if _is_rdbms(provider):
                engine = create_engine(provider.conn_info["database_uri"])
                provider._metadata.drop_all(engine)
