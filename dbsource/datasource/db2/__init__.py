from dbsource.datasource.db2.processor import Db2DatasourceProcessor

__all__ = ["Db2DatasourceProcessor"]
