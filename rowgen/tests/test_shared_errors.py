from rowgen.shared.errors import (
    DatabaseConnectionError,
    InvalidIdentifierError,
    SchemaError,
    SchemaReadError,
    SchemaValidationError,
    UnsupportedTypeError,
)


class TestSchemaError:
    def test_init_no_source(self):
        error = SchemaError("test message")
        assert str(error) == "test message"
        assert error.source is None

    def test_init_with_source(self):
        error = SchemaError("test message", "path/to/snapshot.yaml")
        assert str(error) == "[path/to/snapshot.yaml] test message"
        assert error.source == "path/to/snapshot.yaml"


class TestSchemaValidationError:
    def test_init_no_field_no_source(self):
        error = SchemaValidationError("validation failed")
        assert str(error) == "validation failed"
        assert error.field is None
        assert error.source is None

    def test_init_with_field(self):
        error = SchemaValidationError("invalid value", field="schema")
        assert str(error) == "Field 'schema': invalid value"
        assert error.field == "schema"

    def test_init_with_field_and_source(self):
        error = SchemaValidationError("invalid value", "rowgen.yaml", "schema")
        assert str(error) == "[rowgen.yaml] Field 'schema': invalid value"
        assert error.source == "rowgen.yaml"


class TestInvalidIdentifierError:
    def test_init(self):
        error = InvalidIdentifierError("first name")
        assert str(error) == "'first name' is not a valid Rust identifier"
        assert error.identifier == "first name"
        assert isinstance(error, SchemaValidationError)


class TestDatabaseErrors:
    def test_connection_error_is_schema_error(self):
        error = DatabaseConnectionError("refused")
        assert isinstance(error, SchemaError)
        assert str(error) == "refused"

    def test_read_error_with_source(self):
        error = SchemaReadError("query failed", "public")
        assert str(error) == "[public] query failed"


class TestUnsupportedTypeError:
    def test_init_type_only(self):
        error = UnsupportedTypeError("uuid")
        assert str(error) == "No type mapping for 'uuid'"
        assert error.type_name == "uuid"
        assert error.table is None
        assert error.column is None

    def test_init_with_table_and_column(self):
        error = UnsupportedTypeError("uuid", table="users", column="token")
        assert str(error) == "No type mapping for 'uuid' (column 'users.token')"
        assert error.table == "users"
        assert error.column == "token"

    def test_init_with_column_only(self):
        error = UnsupportedTypeError("json", column="payload")
        assert str(error) == "No type mapping for 'json' (column 'payload')"
