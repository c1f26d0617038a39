from .logger import Logger, get_global_logger, set_global_logger
