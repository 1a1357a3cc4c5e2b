from dbsource.datasource.mysql.processor import MysqlDatasourceProcessor

__all__ = ["MysqlDatasourceProcessor"]
