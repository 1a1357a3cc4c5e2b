from dbsource.datasource.oracle.processor import OracleDatasourceProcessor

__all__ = ["OracleDatasourceProcessor"]
