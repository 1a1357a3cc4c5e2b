from dbsource.datasource.postgresql.processor import PostgreSqlDatasourceProcessor

__all__ = ["PostgreSqlDatasourceProcessor"]
