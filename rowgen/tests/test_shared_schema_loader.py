import pytest
import yaml

from rowgen.shared.catalog import CatalogRow
from rowgen.shared.errors import SchemaError, SchemaValidationError
from rowgen.shared.schema_loader import (
    DEFAULT_EXCLUDED_TABLES,
    GeneratorConfig,
    dump_snapshot,
    load_config,
    load_snapshot,
    load_yaml,
)


class TestLoadYaml:
    def test_valid(self, tmp_path):
        path = tmp_path / "file.yaml"
        path.write_text("key: value\n")
        assert load_yaml(path) == {"key": "value"}

    def test_missing_file(self, tmp_path):
        with pytest.raises(SchemaError) as exc_info:
            load_yaml(tmp_path / "missing.yaml")
        assert "Failed to read file" in str(exc_info.value)

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "file.yaml"
        path.write_text("invalid: yaml: content:")
        with pytest.raises(SchemaError) as exc_info:
            load_yaml(path)
        assert "Invalid YAML" in str(exc_info.value)

    def test_root_not_mapping(self, tmp_path):
        path = tmp_path / "file.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(SchemaError, match="root must be a mapping"):
            load_yaml(path)


class TestLoadConfig:
    def test_defaults(self):
        config = GeneratorConfig()
        assert config.schema == "public"
        assert config.exclude_tables == frozenset({"_sqlx_migrations"})
        assert config.type_overrides == {}

    def test_full_config(self, tmp_path):
        path = tmp_path / "rowgen.yaml"
        path.write_text(
            "schema: billing\n"
            "exclude_tables: [audit_log]\n"
            "type_overrides:\n"
            "  uuid: uuid::Uuid\n"
        )

        config = load_config(path)

        assert config.schema == "billing"
        assert config.exclude_tables == DEFAULT_EXCLUDED_TABLES | {"audit_log"}
        assert config.type_overrides == {"uuid": "uuid::Uuid"}

    def test_empty_lists_allowed(self, tmp_path):
        path = tmp_path / "rowgen.yaml"
        path.write_text("exclude_tables:\ntype_overrides:\n")

        config = load_config(path)

        assert config.exclude_tables == DEFAULT_EXCLUDED_TABLES
        assert config.type_overrides == {}

    def test_unknown_key(self, tmp_path):
        path = tmp_path / "rowgen.yaml"
        path.write_text("tables: []\n")
        with pytest.raises(SchemaValidationError, match="unknown config key"):
            load_config(path)

    def test_bad_exclude_tables(self, tmp_path):
        path = tmp_path / "rowgen.yaml"
        path.write_text("exclude_tables: audit_log\n")
        with pytest.raises(SchemaValidationError) as exc_info:
            load_config(path)
        assert exc_info.value.field == "exclude_tables"

    def test_bad_type_overrides(self, tmp_path):
        path = tmp_path / "rowgen.yaml"
        path.write_text("type_overrides: [uuid]\n")
        with pytest.raises(SchemaValidationError) as exc_info:
            load_config(path)
        assert exc_info.value.field == "type_overrides"

    @pytest.mark.parametrize("value", ["\"\"", "\"   \""])
    def test_empty_type_override_rejected(self, tmp_path, value):
        path = tmp_path / "rowgen.yaml"
        path.write_text(f"type_overrides:\n  uuid: {value}\n")
        with pytest.raises(SchemaValidationError) as exc_info:
            load_config(path)
        assert exc_info.value.field == "type_overrides"

    def test_bad_schema(self, tmp_path):
        path = tmp_path / "rowgen.yaml"
        path.write_text("schema: 3\n")
        with pytest.raises(SchemaValidationError) as exc_info:
            load_config(path)
        assert exc_info.value.field == "schema"


class TestLoadSnapshot:
    def test_flattens_in_file_order(self, tmp_path):
        path = tmp_path / "snapshot.yaml"
        path.write_text("""
tables:
  - name: users
    columns:
      - name: id
        type: integer
        nullable: false
      - name: bio
        type: text
        nullable: true
  - name: posts
    columns:
      - name: title
        type: text
""")

        rows = load_snapshot(path)

        assert rows == [
            CatalogRow("users", "id", "integer", False),
            CatalogRow("users", "bio", "text", True),
            CatalogRow("posts", "title", "text", False),
        ]

    def test_nullable_strings(self, tmp_path):
        path = tmp_path / "snapshot.yaml"
        path.write_text("""
tables:
  - name: users
    columns:
      - {name: name, type: text, nullable: "NO"}
      - {name: bio, type: text, nullable: "YES"}
      - {name: nick, type: text, nullable: "false"}
      - {name: note, type: text, nullable: "no"}
""")

        rows = load_snapshot(path)

        assert [row.nullable for row in rows] == [False, True, False, False]

    def test_bad_nullable_value(self, tmp_path):
        path = tmp_path / "snapshot.yaml"
        path.write_text(
            "tables:\n  - name: users\n    columns:\n"
            "      - {name: bio, type: text, nullable: maybe}\n"
        )
        with pytest.raises(SchemaValidationError) as exc_info:
            load_snapshot(path)
        assert exc_info.value.field == "users.bio"

    def test_missing_tables(self, tmp_path):
        path = tmp_path / "snapshot.yaml"
        path.write_text("other: 1\n")
        with pytest.raises(SchemaValidationError, match="'tables' list"):
            load_snapshot(path)

    def test_missing_table_name(self, tmp_path):
        path = tmp_path / "snapshot.yaml"
        path.write_text("tables:\n  - columns: []\n")
        with pytest.raises(SchemaValidationError, match="missing 'name'"):
            load_snapshot(path)

    def test_missing_column_type(self, tmp_path):
        path = tmp_path / "snapshot.yaml"
        path.write_text("tables:\n  - name: users\n    columns:\n      - name: id\n")
        with pytest.raises(SchemaValidationError) as exc_info:
            load_snapshot(path)
        assert exc_info.value.field == "users.id"

    def test_columns_not_a_list(self, tmp_path):
        path = tmp_path / "snapshot.yaml"
        path.write_text("tables:\n  - name: users\n    columns: id\n")
        with pytest.raises(SchemaValidationError):
            load_snapshot(path)


class TestDumpSnapshot:
    def test_dump_structure(self):
        rows = [
            CatalogRow("users", "id", "integer", False),
            CatalogRow("users", "bio", "text", True),
        ]

        data = yaml.safe_load(dump_snapshot(rows))

        assert data == {
            "tables": [
                {
                    "name": "users",
                    "columns": [
                        {"name": "id", "type": "integer", "nullable": False},
                        {"name": "bio", "type": "text", "nullable": True},
                    ],
                }
            ]
        }

    def test_dump_then_load(self, tmp_path):
        rows = [
            CatalogRow("posts", "title", "text", False),
            CatalogRow("users", "created_at", "timestamp with time zone", False),
        ]
        path = tmp_path / "snapshot.yaml"
        path.write_text(dump_snapshot(rows))

        assert load_snapshot(path) == rows
