from dbsource.datasource.sqlserver.processor import SqlServerDatasourceProcessor

__all__ = ["SqlServerDatasourceProcessor"]
