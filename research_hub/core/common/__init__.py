from research_hub.core.common.logger import logger, setup_logger
from research_hub.core.common.json_extract import extract_json_array, extract_json_object

__all__ = ['logger', 'setup_logger', 'extract_json_array', 'extract_json_object']
