from dbsource.datasource.clickhouse.processor import ClickHouseDatasourceProcessor

__all__ = ["ClickHouseDatasourceProcessor"]
