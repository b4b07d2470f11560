"""Test module for xml_document_builder package initialization."""


def test_package_import() -> None:
    """Test that the package can be imported successfully."""
    # Arrange & Act
    import xml_document_builder

    # Assert
    assert xml_document_builder is not None


def test_package_has_version() -> None:
    """Test that the package has a version attribute."""
    # Arrange & Act
    import xml_document_builder

    # Assert
    assert isinstance(xml_document_builder.__version__, str)
    assert xml_document_builder.__version__ == "0.1.0"


def test_package_has_author() -> None:
    """Test that the package has an author attribute."""
    # Arrange & Act
    import xml_document_builder

    # Assert
    assert xml_document_builder.__author__ == "XML Document Builder Team"


def test_package_exports_node_api() -> None:
    """Test that the public API is reachable from the package root."""
    # Arrange & Act
    import xml_document_builder

    # Assert
    for name in ["XmlNode", "TreeValidator", "TreeConfig", "configure",
                 "InvalidArgumentError"]:
        assert name in xml_document_builder.__all__
        assert hasattr(xml_document_builder, name)

    root = xml_document_builder.XmlNode()
    child = root.insert_child(xml_document_builder.XmlNode())
    assert child.top() is root
