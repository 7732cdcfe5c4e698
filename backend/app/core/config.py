# backend/app/core/config.py
import configs.config as cfg_module
from src.heuristics import load_heuristics


class Settings:
    def __init__(self):
        self.API_PREFIX = cfg_module.API_PREFIX
        self.MODEL_VERSION = cfg_module.MODEL_VERSION
        self.DATA_SOURCES = cfg_module.DATA_SOURCES
        self.DEFAULT_PREDICTION_HORIZON = cfg_module.DEFAULT_PREDICTION_HORIZON
        self.LOG_LEVEL = cfg_module.LOG_LEVEL

        self.DATA_SERVICE_URL = cfg_module.DATA_SERVICE_URL
        self.USAGE_METERING_URL = cfg_module.USAGE_METERING_URL
        self.HTTP_TIMEOUT_SECONDS = cfg_module.HTTP_TIMEOUT_SECONDS

        self.HEURISTICS_FILE = cfg_module.HEURISTICS_FILE
        self.HEURISTICS = load_heuristics(self.HEURISTICS_FILE)


settings = Settings()
