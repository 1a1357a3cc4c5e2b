from typing import Any, Sequence

from dbsource.datasource.base.params import SparkDatasourceParams
from dbsource.datasource.engine_kind import EngineKind
from dbsource.datasource.hive.processor import HiveDatasourceProcessor


class SparkDatasourceProcessor(HiveDatasourceProcessor):
    """Spark Thrift Server, reached through the HiveServer2 protocol."""

    engine = EngineKind.SPARK
    params_class = SparkDatasourceParams

    def table_name_from_row(self, row: Sequence[Any]) -> str:
        # Spark answers SHOW TABLES with (namespace, tableName, isTemporary)
        if len(row) > 1:
            return str(row[1])
        return str(row[0])
