import argparse
from pathlib import Path

from config.config import Config
from src_region_match.toolkit import RegionMatchToolkit
from utils.logger_config import LoggerConfig, get_logger


def load_config(config_path: str) -> Config:
    """
    Load configuration from a JSON file and apply its logging settings.

    Args:
        config_path (str): Path to the configuration JSON file.

    Returns:
        Config: Loaded configuration object.
    """
    config = Config(config_path)
    log_file = Path(config.log_file) if config.log_file else None
    LoggerConfig.setup_root_logger(level=config.log_level, log_file=log_file, force=True)
    return config


def process_region_matching(config: Config) -> dict:
    """
    Run region matching and mosaic stitching over every image pair.

    Args:
        config (Config): Configuration object containing processing parameters.

    Returns:
        dict: Processed and failed pairs per workflow.
    """
    toolkit = RegionMatchToolkit(config)
    toolkit.create_matches()
    toolkit.create_mosaics()
    return toolkit.summaries


def main() -> None:
    parser = argparse.ArgumentParser(description="Epipolar region matching and mosaic stitching")
    parser.add_argument("config", nargs="?", default="config/config_region_match.json",
                        help="path to the configuration JSON file")
    args = parser.parse_args()

    config = load_config(args.config)
    summaries = process_region_matching(config)

    logger = get_logger(__name__)
    for workflow, summary in summaries.items():
        logger.info(f"{workflow}: {len(summary['processed'])} processed, {len(summary['failed'])} failed")
    logger.info(f"Results saved to {config.save_path_result}")


if __name__ == "__main__":
    main()
