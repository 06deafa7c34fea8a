"""Schema conversion handlers for the MCP tools"""

import json
import subprocess
from pathlib import Path

from pydantic import ValidationError

from core.converter import build_entities, convert_schemas
from core.models import SourceFile
from core.pipeline import convert_local_schemas, fetch_and_convert_schemas
from core.schema.parser import SchemaParseError
from core.sources.git import SubfolderNotFoundError
from core.sources.local import read_schema_path
from mcp_server.config import DEFAULT_OUTPUT_EXTENSION


def _absolute_path_error(name: str, value: str) -> str | None:
    if not Path(value).is_absolute():
        return json.dumps({"error": f"{name} must be an absolute path", "provided_path": value}, indent=2)
    return None


class ConverterHandler:
    """Handles all schema conversion operations"""

    def convert_schemas(
        self, files: list[dict[str, str]], output_extension: str = DEFAULT_OUTPUT_EXTENSION
    ) -> str:
        """Convert schema sources passed inline

        Args:
            files: List of {"file_name": ..., "content": ...} objects, in processing order
            output_extension: Extension of the generated modules

        Returns:
            JSON string mapping output file names to generated source text
        """
        try:
            sources = [SourceFile.model_validate(item) for item in files]
            outputs = convert_schemas(sources, output_extension)
            return json.dumps({"outputs": outputs, "count": len(outputs)}, indent=2)
        except SchemaParseError as e:
            return json.dumps({"error": str(e), "file_name": e.file_name, "line": e.line}, indent=2)
        except ValidationError as e:
            return json.dumps({"error": f"Invalid files argument: {e!s}"}, indent=2)

    def convert_local_schemas(
        self, input_dir: str, output_dir: str, output_extension: str = DEFAULT_OUTPUT_EXTENSION
    ) -> str:
        """Convert the schema files of a local directory

        Args:
            input_dir: Absolute path of the directory holding schema files
            output_dir: Absolute path of the directory receiving generated modules
            output_extension: Extension of the generated modules

        Returns:
            JSON string of the conversion summary
        """
        for name, value in (("input_dir", input_dir), ("output_dir", output_dir)):
            error = _absolute_path_error(name, value)
            if error:
                return error

        if not Path(input_dir).is_dir():
            return json.dumps({"error": "Input directory not found", "path": input_dir}, indent=2)

        try:
            summary = convert_local_schemas(Path(input_dir), Path(output_dir), output_extension=output_extension)
            return summary.model_dump_json(indent=2)
        except SchemaParseError as e:
            return json.dumps({"error": str(e), "file_name": e.file_name, "line": e.line}, indent=2)
        except OSError as e:
            return json.dumps({"error": f"Failed to convert schemas: {e!s}"}, indent=2)

    def fetch_and_convert_schemas(
        self, repo_url: str, subfolder: str, output_dir: str, output_extension: str = DEFAULT_OUTPUT_EXTENSION
    ) -> str:
        """Fetch a schema folder from a Git repository and convert it in place

        Args:
            repo_url: SSH or HTTPS repository URL
            subfolder: Folder inside the repository holding the schema files
            output_dir: Absolute path of the directory receiving fetched files and outputs
            output_extension: Extension of the generated modules

        Returns:
            JSON string of the conversion summary
        """
        error = _absolute_path_error("output_dir", output_dir)
        if error:
            return error

        try:
            summary = fetch_and_convert_schemas(repo_url, subfolder, Path(output_dir), output_extension=output_extension)
            return summary.model_dump_json(indent=2)
        except SubfolderNotFoundError as e:
            return json.dumps({"error": str(e), "subfolder": subfolder}, indent=2)
        except subprocess.CalledProcessError as e:
            return json.dumps({"error": f"git failed: {(e.stderr or '').strip() or e!s}"}, indent=2)
        except SchemaParseError as e:
            return json.dumps({"error": str(e), "file_name": e.file_name, "line": e.line}, indent=2)
        except (ValueError, OSError) as e:
            return json.dumps({"error": f"Failed to fetch and convert schemas: {e!s}"}, indent=2)

    def inspect_schemas(self, path: str) -> str:
        """Return the entity model extracted from a schema file or directory

        Args:
            path: Absolute path of a schema file or directory

        Returns:
            JSON string containing the entities
        """
        error = _absolute_path_error("path", path)
        if error:
            return error

        if not Path(path).exists():
            return json.dumps({"error": "Schema path not found", "path": path}, indent=2)

        try:
            entities = build_entities(read_schema_path(Path(path)))
            data = [entity.model_dump(mode="json", exclude_none=True) for entity in entities]
            return json.dumps({"entities": data, "count": len(data)}, indent=2)
        except SchemaParseError as e:
            return json.dumps({"error": str(e), "file_name": e.file_name, "line": e.line}, indent=2)
        except OSError as e:
            return json.dumps({"error": f"Failed to inspect schemas: {e!s}"}, indent=2)
