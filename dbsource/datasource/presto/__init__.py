from dbsource.datasource.presto.processor import PrestoDatasourceProcessor

__all__ = ["PrestoDatasourceProcessor"]
