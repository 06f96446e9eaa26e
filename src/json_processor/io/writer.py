"""File writer for JSON trees."""

import logging
import os
from pathlib import Path
from typing import Any, Dict, Optional, Union

from ..tree import JSONArray, JSONObject


class JSONWriter:
    """
    Writes object and array nodes to disk as UTF-8 JSON.

    Parent directories are created when missing.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        """
        Initialize the writer.

        Args:
            logger: Optional logger instance
        """
        self.logger = logger or logging.getLogger(__name__)

    def write(self, node: Union[JSONObject, JSONArray], path: Union[str, os.PathLike],
              indent: Optional[int] = 2) -> Dict[str, Any]:
        """
        Write a tree to a file.

        Args:
            node: Tree to write
            path: Destination file path
            indent: Indentation width, or None for compact output

        Returns:
            Dictionary with the absolute path and size of the written file

        Raises:
            OSError: If the file or its directory cannot be written
        """
        file_path = Path(path)
        file_path.parent.mkdir(parents=True, exist_ok=True)

        with open(file_path, "w", encoding="utf-8") as f:
            f.write(node.to_json(indent=indent))
            f.write("\n")

        file_size = file_path.stat().st_size
        self.logger.debug(f"Wrote {file_size} bytes to {file_path}")
        return {
            "path": str(file_path.absolute()),
            "size": file_size
        }
