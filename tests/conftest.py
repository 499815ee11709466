import json
import os
import sys

import pytest

# Set PYTHONPATH to include src if the package is not installed
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src")))

from lambda_builder.core.build_config import BuildConfig
from lambda_builder.core.context import BuildContext
from lambda_builder.settings import BuilderSettings


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Keep LAMBDA_BUILD_* variables from the developer's shell out of tests."""
    for key in list(os.environ):
        if key.startswith("LAMBDA_BUILD_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def project_dir(tmp_path):
    """
    Create a project with one function:

        src/functions/foo.json
        src/functions/foo.ts
    """
    functions_dir = tmp_path / "src" / "functions"
    functions_dir.mkdir(parents=True)

    (functions_dir / "foo.json").write_text(json.dumps({"memorySize": 128}))
    (functions_dir / "foo.ts").write_text(
        "export const handler = async () => {\n"
        "    console.log('handling');\n"
        "    return { statusCode: 200 };\n"
        "};\n"
    )
    return tmp_path


@pytest.fixture
def settings(project_dir):
    return BuilderSettings(root_dir=project_dir, esbuild_binary="esbuild", color=False)


@pytest.fixture
def build_context(project_dir, settings):
    """BuildContext for the sample project with default build config."""
    return BuildContext(
        root_dir=project_dir,
        functions_dir=project_dir / "src" / "functions",
        output_dir=project_dir / "dist",
        config=BuildConfig(),
        settings=settings,
    )
