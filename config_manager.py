"""Configuration management for the queensteps experiment suite.

`ConfigManager` reads and writes `config.json`, the single place where board
sizes, run counts, per-algorithm time limits and default strategy parameters
are kept between runs.

File format (high-level)
------------------------
- experiment_settings: board sizes, run counts, base seed and output directory.
- time_limits: mapping algorithm name -> seconds (null disables the limit).
- algorithm_parameters: mapping algorithm name -> keyword parameters of the
  corresponding strategy (e.g. {"genetic": {"generation_size": 100, ...}}).

All methods return Python native types; semantic validation of parameters is
left to the strategies, which reject malformed values before any search.
"""
import json
from pathlib import Path


class ConfigManager:
    """Load, query, and persist the experiment configuration.

    Parameters
    ----------
    config_path : str | os.PathLike, default "config.json"
        Path to the configuration file.
    """

    def __init__(self, config_path="config.json"):
        self.config_path = Path(config_path)
        self.config = self.load_config()

    def load_config(self):
        """Load and parse the JSON configuration file.

        Returns
        -------
        dict
            Root configuration object.
        """
        if not self.config_path.exists():
            raise FileNotFoundError(
                f"Configuration file not found: {self.config_path}\n"
                f"Create it or copy the default config.json template"
            )

        with open(self.config_path, "r") as f:
            config = json.load(f)
        if not isinstance(config, dict):
            raise ValueError(f"Configuration root must be an object: {self.config_path}")
        return config

    def save_config(self):
        """Persist the current in-memory configuration to disk."""
        with open(self.config_path, "w") as f:
            json.dump(self.config, f, indent=2)

    def get_experiment_settings(self):
        """Return experiment settings (sizes, runs, seed, output dir)."""
        return self.config.get("experiment_settings", {})

    def get_time_limits(self):
        """Return per-algorithm time limits in seconds."""
        return self.config.get("time_limits", {})

    def get_algorithm_parameters(self, algorithm=None):
        """Return stored strategy parameters.

        Parameters
        ----------
        algorithm : str | None
            If provided, return the parameters of that algorithm only;
            otherwise return the whole mapping.
        """
        params = self.config.get("algorithm_parameters", {})
        if algorithm:
            return params.get(algorithm, {})
        return params

    def save_algorithm_parameters(self, algorithm, parameters):
        """Persist the parameters of one algorithm."""
        self.config.setdefault("algorithm_parameters", {})[algorithm] = dict(parameters)
        self.save_config()
        print(f"Parameters for {algorithm} saved to {self.config_path}")

    def update_setting(self, section, key, value):
        """Update a specific setting and persist the change immediately."""
        self.config.setdefault(section, {})[key] = value
        self.save_config()
