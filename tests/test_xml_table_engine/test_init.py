"""Test module for xml_table_engine package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    # Arrange & Act
    import xml_table_engine

    # Assert
    assert xml_table_engine is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    # Arrange & Act
    import xml_table_engine

    # Assert
    assert isinstance(xml_table_engine.__version__, str)
    assert xml_table_engine.__version__ == "0.1.0"


def test_package_all_exports() -> None:
    """Test that __all__ names resolve to package attributes."""
    # Arrange & Act
    import xml_table_engine

    # Assert
    for name in xml_table_engine.__all__:
        assert hasattr(xml_table_engine, name), name
    assert "DocumentEngine" in xml_table_engine.__all__
    assert "Grid" in xml_table_engine.__all__
