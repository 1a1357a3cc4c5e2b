from dbsource.datasource.spark.processor import SparkDatasourceProcessor

__all__ = ["SparkDatasourceProcessor"]
