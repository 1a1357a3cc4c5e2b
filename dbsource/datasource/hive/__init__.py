from dbsource.datasource.hive.processor import HiveDatasourceProcessor

__all__ = ["HiveDatasourceProcessor"]
