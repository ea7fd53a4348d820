from datetime import datetime


class TestDataImportService:
    """Tests for DataImportService."""

    def test_create_data_import_with_filename(self, services):
        data_import = services.data_imports.create("20250101_120000_export.csv.gz")

        assert data_import.id > 0
        assert data_import.filename == "20250101_120000_export.csv.gz"
        assert data_import.imported_count == 0
        assert isinstance(data_import.created_at, datetime)

    def test_create_data_import_without_filename(self, services):
        """Test creating a data import without a filename (archiving disabled)."""
        data_import = services.data_imports.create(None)

        assert data_import.filename is None

    def test_update_counts(self, services):
        created = services.data_imports.create(None)

        services.data_imports.update_counts(created.id, 12, 3)

        found = services.data_imports.find(created.id)
        assert found.imported_count == 12
        assert found.duplicate_count == 3

    def test_find_all_newest_first(self, services):
        first = services.data_imports.create("a.gz")
        second = services.data_imports.create("b.gz")

        assert [d.id for d in services.data_imports.find_all()] == [second.id, first.id]

    def test_find_not_found(self, services):
        assert services.data_imports.find(999) is None
