from __future__ import annotations

import importlib.util
import sqlite3
import unittest

from sqldao import (
    AsyncDatabase,
    Database,
    Dialect,
    MSSQLDialect,
    MySQLDialect,
    OracleDialect,
    PostgresDialect,
    SQLiteDialect,
    SqlTypes,
    close_all,
    close_quietly,
    connection_product_name,
    detect_vendor,
    dialect_for_connection,
    dialect_for_vendor,
)


HAS_ORACLEDB = importlib.util.find_spec("oracledb") is not None


class _DummyCursor:
    def __init__(self, description=None):
        self.description = description


class _InvalidDialect(Dialect):
    paramstyle = "invalid"


class _SizedDialect(Dialect):
    def input_size(self, sql_type):  # noqa: ANN001,ANN201
        return 4000 if sql_type is SqlTypes.VARCHAR else None


class _RecordingCursor:
    def __init__(self, conn):
        self._conn = conn
        self.closed = False

    def execute(self, sql, params=None):  # noqa: ANN001,ANN201
        self._conn.executed.append((sql, params))

    def setinputsizes(self, *sizes):  # noqa: ANN002,ANN201
        self._conn.input_sizes.append(sizes)

    def close(self) -> None:
        self.closed = True
        self._conn.closed_cursors += 1


class _RecordingConn:
    def __init__(self):
        self.executed: list = []
        self.input_sizes: list = []
        self.closed_cursors = 0

    def cursor(self) -> _RecordingCursor:
        return _RecordingCursor(self)


class _PlainCursor:
    def __init__(self, conn):
        self._conn = conn

    def execute(self, sql, params=None):  # noqa: ANN001,ANN201
        self._conn.executed.append((sql, params))

    def close(self) -> None:
        pass


class _PlainConn:
    def __init__(self):
        self.executed: list = []

    def cursor(self) -> _PlainCursor:
        return _PlainCursor(self)


class _FailingClose:
    def close(self) -> None:
        raise RuntimeError("close failed")


class _FakeOdbcConn:
    __module__ = "pyodbc"

    def getinfo(self, code):  # noqa: ANN001,ANN201
        return "Microsoft SQL Server" if code == 17 else None


class _FakeOracleConn:
    __module__ = "oracledb.connection"


class _FakePyMySQLConn:
    __module__ = "pymysql.connections"


class DialectTests(unittest.TestCase):
    def test_builtin_placeholders(self) -> None:
        self.assertEqual(SQLiteDialect().placeholder("x"), "?")
        self.assertEqual(SQLiteDialect().named_placeholder("x"), ":x")
        self.assertEqual(MySQLDialect().placeholder("x"), "%s")
        self.assertEqual(MySQLDialect().named_placeholder("x"), "%(x)s")
        self.assertEqual(PostgresDialect().named_placeholder("x"), "%(x)s")
        self.assertEqual(MSSQLDialect().placeholder("x"), "?")
        self.assertEqual(OracleDialect().placeholder("x"), ":x")

    def test_default_paging_per_dialect(self) -> None:
        self.assertEqual(Dialect().default_paging, "offset_fetch")
        self.assertEqual(MSSQLDialect().default_paging, "offset_fetch")
        self.assertEqual(MySQLDialect().default_paging, "limit_offset")
        self.assertEqual(OracleDialect().default_paging, "rownum")

    def test_invalid_paramstyle_raises(self) -> None:
        with self.assertRaises(ValueError):
            _InvalidDialect().placeholder("x")

    def test_default_input_size_is_none(self) -> None:
        self.assertIsNone(Dialect().input_size(SqlTypes.CURSOR))

    def test_oracle_procedure_types_map_to_driver_types(self) -> None:
        names = OracleDialect.input_type_names
        self.assertEqual(names[SqlTypes.CURSOR], "DB_TYPE_CURSOR")
        self.assertEqual(names[SqlTypes.INTEGER], "DB_TYPE_NUMBER")
        self.assertEqual(names[SqlTypes.NUMERIC], "DB_TYPE_NUMBER")
        self.assertEqual(names[SqlTypes.DATE], "DB_TYPE_DATE")
        self.assertEqual(names[SqlTypes.TIMESTAMP], "DB_TYPE_TIMESTAMP")
        self.assertEqual(names[SqlTypes.CLOB], "DB_TYPE_CLOB")
        self.assertEqual(names[SqlTypes.VARCHAR], "DB_TYPE_VARCHAR")
        self.assertIsNone(OracleDialect().input_size(SqlTypes.OTHER))
        self.assertIsNone(OracleDialect().input_size(SqlTypes.NULL))


class VendorDetectionTests(unittest.TestCase):
    def test_detect_vendor_from_product_names(self) -> None:
        cases = {
            "Oracle": "oracle",
            "oracledb": "oracle",
            "MySQL": "mysql",
            "MariaDB": "mysql",
            "Microsoft SQL Server": "mssql",
            "pymssql": "mssql",
            "PostgreSQL": "postgres",
            "psycopg": "postgres",
            "sqlite3": "sqlite",
        }
        for product, vendor in cases.items():
            with self.subTest(product=product):
                self.assertEqual(detect_vendor(product), vendor)

        self.assertIsNone(detect_vendor("DB2/LINUXX8664"))
        self.assertIsNone(detect_vendor(None))

    def test_product_name_uses_getinfo_then_module(self) -> None:
        self.assertEqual(connection_product_name(_FakeOdbcConn()), "Microsoft SQL Server")
        self.assertEqual(connection_product_name(_FakeOracleConn()), "oracledb")

        conn = sqlite3.connect(":memory:")
        try:
            self.assertEqual(connection_product_name(conn), "sqlite3")
        finally:
            conn.close()

    def test_dialect_for_connection(self) -> None:
        self.assertIsInstance(dialect_for_connection(_FakeOdbcConn()), MSSQLDialect)
        self.assertIsInstance(dialect_for_connection(_FakeOracleConn()), OracleDialect)
        self.assertIsInstance(dialect_for_connection(_FakePyMySQLConn()), MySQLDialect)
        self.assertIs(type(dialect_for_connection(_RecordingConn())), Dialect)

    def test_dialect_for_unknown_vendor_raises(self) -> None:
        with self.assertRaises(ValueError):
            dialect_for_vendor("db2")


class DatabaseAdapterTests(unittest.TestCase):
    def setUp(self) -> None:
        self.conn = sqlite3.connect(":memory:")
        self.db = Database(self.conn)

    def tearDown(self) -> None:
        self.conn.close()

    def test_dialect_detected_from_connection(self) -> None:
        self.assertIsInstance(self.db.dialect, SQLiteDialect)
        self.assertEqual(self.db.product_name(), "sqlite3")

    def test_execute_fetchone_fetchall_update(self) -> None:
        self.db.execute('CREATE TABLE "t" ("id" INTEGER, "name" TEXT);').close()
        self.assertEqual(
            self.db.update('INSERT INTO "t" ("id", "name") VALUES (?, ?);', [1, "a"]), 1
        )
        self.db.update('INSERT INTO "t" ("id", "name") VALUES (:id, :name);', {"id": 2, "name": "b"})

        row = self.db.fetchone('SELECT * FROM "t" WHERE "id" = ?;', [1])
        rows = self.db.fetchall('SELECT * FROM "t" ORDER BY "id" ASC;')
        missing = self.db.fetchone('SELECT * FROM "t" WHERE "id" = ?;', [99])

        self.assertEqual(row["name"], "a")
        self.assertEqual([r["name"] for r in rows], ["a", "b"])
        self.assertIsNone(missing)
        self.assertEqual(self.db.update('UPDATE "t" SET "name" = ?;', ["z"]), 2)

    def test_row_factory_mapping_is_supported(self) -> None:
        self.conn.row_factory = sqlite3.Row
        self.db.update('CREATE TABLE "t" ("id" INTEGER);')
        self.db.update('INSERT INTO "t" ("id") VALUES (1);')
        row = self.db.fetchone('SELECT * FROM "t";')
        self.assertEqual(row["id"], 1)

    def test_row_to_mapping_tuple_without_description_raises(self) -> None:
        with self.assertRaises(TypeError):
            self.db._row_to_mapping(_DummyCursor(description=None), (1,))  # noqa: SLF001

    def test_row_to_mapping_fallback_dict_and_unsupported_type(self) -> None:
        mapped = self.db._row_to_mapping(_DummyCursor(), {("id", 1)})  # noqa: SLF001
        self.assertEqual(mapped["id"], 1)

        with self.assertRaises(TypeError):
            self.db._row_to_mapping(_DummyCursor(), 12345)  # noqa: SLF001

    def test_driver_errors_propagate(self) -> None:
        with self.assertRaises(sqlite3.OperationalError):
            self.db.fetchall('SELECT * FROM "missing";')

    def test_closed_adapter_rejects_queries(self) -> None:
        conn = sqlite3.connect(":memory:")
        db = Database(conn)
        db.close()
        db.close()
        with self.assertRaises(RuntimeError):
            db.fetchall("SELECT 1;")

    def test_context_manager_closes_connection(self) -> None:
        conn = sqlite3.connect(":memory:")
        with Database(conn) as db:
            self.assertEqual(db.fetchone("SELECT 1 AS one;")["one"], 1)
        with self.assertRaises(sqlite3.ProgrammingError):
            conn.execute("SELECT 1;")

    def test_missing_connection_raises(self) -> None:
        with self.assertRaises(ValueError):
            Database(None)


class DatabaseCallTests(unittest.TestCase):
    def test_call_executes_and_closes_cursor(self) -> None:
        conn = _RecordingConn()
        db = Database(conn, MSSQLDialect())

        db.call("{ call p(?, ?) }", [1, None], [SqlTypes.INTEGER, SqlTypes.NULL])

        self.assertEqual(conn.executed, [("{ call p(?, ?) }", [1, None])])
        self.assertEqual(conn.input_sizes, [])
        self.assertEqual(conn.closed_cursors, 1)

    def test_call_forwards_dialect_input_sizes(self) -> None:
        conn = _RecordingConn()
        db = Database(conn, _SizedDialect())

        db.call("{ call p(?, ?) }", ["a", 1], [SqlTypes.VARCHAR, SqlTypes.INTEGER])

        self.assertEqual(conn.input_sizes, [(4000, None)])

    def test_call_without_params(self) -> None:
        conn = _RecordingConn()
        Database(conn, MSSQLDialect()).call("{ call p() }")
        self.assertEqual(conn.executed, [("{ call p() }", None)])

    def test_call_skips_input_sizes_without_setinputsizes(self) -> None:
        conn = _PlainConn()
        Database(conn, OracleDialect()).call(
            "BEGIN p(:p1); END;", [1], [SqlTypes.CURSOR]
        )
        self.assertEqual(conn.executed, [("BEGIN p(:p1); END;", [1])])

    @unittest.skipUnless(HAS_ORACLEDB, "oracledb is not installed")
    def test_oracle_call_forwards_driver_types(self) -> None:
        import oracledb

        conn = _RecordingConn()
        Database(conn, OracleDialect()).call(
            "BEGIN p(:p1, :p2, :p3, :p4); END;",
            [1, "a", None, None],
            [SqlTypes.INTEGER, SqlTypes.VARCHAR, SqlTypes.CURSOR, SqlTypes.NULL],
        )

        self.assertEqual(
            conn.input_sizes,
            [(oracledb.DB_TYPE_NUMBER, oracledb.DB_TYPE_VARCHAR, oracledb.DB_TYPE_CURSOR, None)],
        )
        self.assertEqual(len(conn.executed), 1)


class CloseHelperTests(unittest.TestCase):
    def test_close_errors_are_logged_not_raised(self) -> None:
        with self.assertLogs("sqldao.core.resources", level="ERROR") as captured:
            close_quietly(_FailingClose())
        self.assertIn("close failed", captured.output[0])

    def test_close_all_closes_every_resource(self) -> None:
        conn = _RecordingConn()
        first, second = conn.cursor(), conn.cursor()
        with self.assertLogs("sqldao.core.resources", level="ERROR"):
            close_all(first, _FailingClose(), None, object(), second)
        self.assertTrue(first.closed)
        self.assertTrue(second.closed)


class AsyncDatabaseAdapterTests(unittest.IsolatedAsyncioTestCase):
    async def test_sync_connection_is_supported(self) -> None:
        conn = sqlite3.connect(":memory:")
        db = AsyncDatabase(conn)
        try:
            await db.update('CREATE TABLE "t" ("id" INTEGER);')
            self.assertEqual(await db.update('INSERT INTO "t" ("id") VALUES (?), (?);', [1, 2]), 2)
            rows = await db.fetchall('SELECT * FROM "t" ORDER BY "id";')
            row = await db.fetchone('SELECT * FROM "t" WHERE "id" = :id;', {"id": 2})
            self.assertEqual([r["id"] for r in rows], [1, 2])
            self.assertEqual(row["id"], 2)
            self.assertIsInstance(db.dialect, SQLiteDialect)
        finally:
            await db.aclose()

    async def test_call_uses_recording_cursor(self) -> None:
        conn = _RecordingConn()
        db = AsyncDatabase(conn, MSSQLDialect())
        await db.call("{ call p(?) }", [1], [SqlTypes.INTEGER])
        self.assertEqual(conn.executed, [("{ call p(?) }", [1])])
        self.assertEqual(conn.closed_cursors, 1)


if __name__ == "__main__":
    unittest.main()
