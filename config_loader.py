# Module for loading and validating configuration
import json
import sys
import constants # Import constants


def default_config():
    """Configuration used when no config file is given."""
    return {
        'output_dir': constants.DEFAULT_OUTPUT_DIR,
        'log_file': constants.DEFAULT_LOG_FILE,
        'user_agent': constants.DEFAULT_USER_AGENT,
        'request_timeout': constants.DEFAULT_REQUEST_TIMEOUT,
        'max_retries': constants.DEFAULT_MAX_RETRIES,
        'request_delay_seconds': constants.DEFAULT_REQUEST_DELAY,
        'max_workers': constants.DEFAULT_MAX_WORKERS,
        'page_suffix': constants.DEFAULT_PAGE_SUFFIX,
        'relative_asset_links': False,
        'chunk_size': constants.DEFAULT_CHUNK_SIZE,
    }


def _validate(config, config_path):
    if not isinstance(config['request_timeout'], (int, float)) or config['request_timeout'] <= 0:
        raise ValueError("Config 'request_timeout' must be a positive number.")
    if not isinstance(config['request_delay_seconds'], (int, float)) or config['request_delay_seconds'] < 0:
        raise ValueError("Config 'request_delay_seconds' must be a non-negative number.")
    if not isinstance(config['max_retries'], int) or config['max_retries'] < 0:
        raise ValueError("Config 'max_retries' must be a non-negative integer.")
    if not isinstance(config['max_workers'], int) or config['max_workers'] < 1:
        raise ValueError("Config 'max_workers' must be a positive integer.")
    if not isinstance(config['chunk_size'], int) or config['chunk_size'] < 1:
        raise ValueError("Config 'chunk_size' must be a positive integer.")
    if not isinstance(config['page_suffix'], str) or not config['page_suffix'] or '.' in config['page_suffix']:
        raise ValueError("Config 'page_suffix' must be a non-empty extension without dots.")
    for key in ('output_dir', 'log_file', 'user_agent'):
        if not isinstance(config[key], str) or not config[key]:
            raise ValueError(f"Config '{key}' must be a non-empty string.")

    if config['page_suffix'] != constants.HTML_EXTENSION:
        # Use print here as logging might not be configured yet
        print(f"Warning: page_suffix '{config['page_suffix']}' in {config_path} disables HTML processing of top-level pages.", file=sys.stderr)


def load_config(config_path=None):
    """Loads configuration from a JSON file, validates, and sets defaults."""
    config = default_config()
    if config_path is None:
        return config

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            loaded = json.load(f)

        if not isinstance(loaded, dict):
            raise ValueError(f"Config file '{config_path}' must contain a JSON object.")

        unknown_keys = [key for key in loaded if key not in config]
        if unknown_keys:
            print(f"Warning: Ignoring unknown config keys in '{config_path}': {', '.join(unknown_keys)}", file=sys.stderr)

        # --- Set Defaults for Optional Keys ---
        for key in config:
            if key in loaded:
                config[key] = loaded[key]

        _validate(config, config_path)
        return config

    except FileNotFoundError:
        raise # Re-raise the FileNotFoundError
    except json.JSONDecodeError as e:
        raise ValueError(f"Error decoding JSON from config file '{config_path}': {e}") from e
    except ValueError:
        raise # Let the ValueError raised during validation propagate
    except Exception as e: # Catch any other unexpected errors during loading/validation
        raise RuntimeError(f"An unexpected error occurred loading configuration from '{config_path}': {e}") from e
