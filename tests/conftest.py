"""Pytest fixtures for staticassets-mcp tests."""

import pytest
import sys
import os

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from staticassets_mcp.manifest import ContentRootDefinition  # noqa: E402


@pytest.fixture
def library_definition():
    """Single content root from a package dependency."""
    return ContentRootDefinition(
        base_path="MyLibrary",
        content_root="c:/nuget/MyLibrary/razorContent",
        source_label="wwwroot\\sample.js",
    )


@pytest.fixture
def package_definitions():
    """Content roots for a direct and a transitive package dependency."""
    return [
        ContentRootDefinition(
            base_path="_content/PackageLibraryTransitiveDependency",
            content_root="/packages/packagelibrarytransitivedependency/1.0.0/buildTransitive/../razorContent/",
            source_label="PackageLibraryTransitiveDependency",
        ),
        ContentRootDefinition(
            base_path="_content/PackageLibraryDirectDependency",
            content_root="/packages/packagelibrarydirectdependency/1.0.0/build/../razorContent/",
            source_label="PackageLibraryDirectDependency",
        ),
    ]


@pytest.fixture
def library_manifest_text():
    """Expected manifest for library_definition."""
    return (
        '<AspNetCoreStaticAssets Version="1.0">\n'
        '  <ContentRoot BasePath="MyLibrary" Path="c:/nuget/MyLibrary/razorContent" />\n'
        "</AspNetCoreStaticAssets>"
    )
