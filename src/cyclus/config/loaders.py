import json
import logging
from pathlib import Path
from typing import Any, Union

import yaml

from ..errors import UsageError

logger = logging.getLogger(__name__)

_YAML_SUFFIXES = (".yaml", ".yml")


def load_file(path: Union[str, Path]) -> Any:
    """
    Load a YAML or JSON file into plain data.

    The result can be registered directly as a data component:

        SystemMap({"config": load_file("app.yaml"), "server": using(Server(), ["config"])})

    :param path: Path to the file.
    :return: The parsed content; an empty file yields an empty dict.
    :raises FileNotFoundError: If the file does not exist.
    :raises IsADirectoryError: If the path is a directory.
    :raises UsageError: If the file type is not supported.
    """
    path = Path(path).expanduser()
    logger.debug("Loading data file: %s", path)

    if not path.exists():
        logger.error("Data file not found: %s", path.absolute())
        raise FileNotFoundError(f"Data file not found: {path.absolute()}")

    if path.is_dir():
        logger.error("Path is a directory, not a file: %s", path.absolute())
        raise IsADirectoryError(path.absolute())

    suffix = path.suffix.lower()
    if suffix not in _YAML_SUFFIXES and suffix != ".json":
        logger.error("Unsupported file type: %s", path.name)
        raise UsageError(f"Unsupported file type: {path.name}")

    with open(path, "r", encoding="utf-8") as fp:
        if not fp.read(1):
            logger.debug("Data file is empty: %s", path)
            return {}

        fp.seek(0)

        if suffix in _YAML_SUFFIXES:
            return yaml.safe_load(fp)
        return json.load(fp)
