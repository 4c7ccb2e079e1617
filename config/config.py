import json
from typing import Dict, Any
from pathlib import Path
import shutil

from utils.file_operations import PathManager
from utils.logger_config import get_logger

logger = get_logger(__name__)

SAVE_FORMATS = ("npy", "png", "tiff", "csv")


class Config:
    def __init__(self, config_path: str):
        self.config_path = Path(config_path)
        self.config_data = self._load_config(self.config_path)
        self._check_required_keys()
        self._init_defaults()
        self._validate_matching_config()
        self._check_folder(self.config_data["save_path_temp"], is_temp=True)
        self._check_folder(self.config_data["save_path_result"])

    def _load_config(self, config_path: Path) -> Dict[str, Any]:
        with open(config_path, 'r', encoding='utf-8') as config_file:
            config_data = json.load(config_file)

        # Process string formatting for paths that contain {case_name}
        self._process_string_formatting(config_data)
        return config_data

    def _process_string_formatting(self, config_data: Dict[str, Any]) -> None:
        """Replace {case_name} in string values with the configured case name."""
        case_name = config_data.get("case_name", "")

        for key, value in config_data.items():
            if isinstance(value, str) and "{case_name}" in value:
                try:
                    config_data[key] = value.format(case_name=case_name)
                except (KeyError, ValueError) as e:
                    # Keep original value if formatting fails
                    logger.warning(f"Could not format value for key '{key}': {e}")

    def _check_required_keys(self) -> None:
        missing = [key for key in ("input_path", "save_path_result", "save_path_temp")
                   if key not in self.config_data]
        if missing:
            raise ValueError(f"Missing required configuration keys: {missing}")

    def _init_defaults(self) -> None:
        """Fill in defaults for optional parameters. Config values take precedence."""
        defaults = {
            "case_name": "",
            "result_root": "result",
            "image_extension": ".png",
            # Stitching feature
            "feature_window_size": 3,
            "feature_anchor_x_ratio": 0.75,
            "feature_anchor_y_ratio": 0.5,
            "search_width_ratio": 0.5,
            # Output
            "mosaic_save_formats": ["npy", "png"],
            "save_score_profiles": "False",
            # Logging
            "log_level": "INFO",
            "log_file": None
        }

        for key, value in defaults.items():
            self.config_data.setdefault(key, value)

    def _validate_matching_config(self) -> None:
        """Validate matching and stitching parameters."""
        window_size = self.config_data["feature_window_size"]
        if isinstance(window_size, bool) or not isinstance(window_size, int) or window_size <= 0:
            raise ValueError("feature_window_size must be a positive integer")

        for key in ("feature_anchor_x_ratio", "feature_anchor_y_ratio", "search_width_ratio"):
            ratio = self.config_data[key]
            if isinstance(ratio, bool) or not isinstance(ratio, (int, float)) or not 0 < ratio <= 1:
                raise ValueError(f"{key} must be a number in (0, 1]")

        formats = self.config_data["mosaic_save_formats"]
        if not isinstance(formats, list) or not formats:
            raise ValueError("mosaic_save_formats must be a non-empty list")
        unknown = [f for f in formats if f not in SAVE_FORMATS]
        if unknown:
            raise ValueError(f"Unsupported mosaic_save_formats {unknown}, expected any of {SAVE_FORMATS}")

        extension = self.config_data["image_extension"]
        if not isinstance(extension, str) or not extension.startswith("."):
            raise ValueError("image_extension must start with '.'")

    def _check_folder(self, folder_name, is_temp=False):
        base = Path(self.config_data["result_root"]) / folder_name
        if is_temp:
            # empty the temp folder and create it again
            if base.exists():
                shutil.rmtree(base)
            base.mkdir(parents=True)
            self.config_data["save_path_temp"] = str(base)
        else:
            # results are never overwritten: name, name(1), name(2), ...
            new_path = PathManager.next_free_directory(base)
            new_path.mkdir(parents=True)
            self.config_data["save_path_result"] = str(new_path)

    def get_stitching_parameters(self) -> Dict[str, Any]:
        """Keyword arguments for DisplacementEstimator."""
        return {
            "window_size": self.config_data["feature_window_size"],
            "anchor_x_ratio": self.config_data["feature_anchor_x_ratio"],
            "anchor_y_ratio": self.config_data["feature_anchor_y_ratio"],
            "search_width_ratio": self.config_data["search_width_ratio"]
        }

    def is_enabled(self, key: str) -> bool:
        """String flags follow the "True"/"False" convention of the config files."""
        value = self.config_data.get(key, "False")
        return value is True or value == "True"

    def __getattr__(self, name: str) -> Any:
        if name == "config_data":
            raise AttributeError(name)
        if name in self.config_data:
            return self.config_data[name]
        raise AttributeError(f"'{self.__class__.__name__}' object has no attribute '{name}'")
