import logging
import logging.config
import sys
from typing import Optional


def setup_logging(default_level=logging.WARNING, log_file: Optional[str] = None):
    handlers = ['default']
    logging_config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'standard': {
                'format': '%(asctime)s [%(levelname)s] %(name)s: %(message)s'
            },
        },
        'handlers': {
            'default': {
                'level': default_level,
                'formatter': 'standard',
                'class': 'logging.StreamHandler',
                'stream': sys.stdout,
            },
        },
        'loggers': {
            '': {  # root logger
                'handlers': handlers,
                'level': default_level,
                'propagate': True
            }
        }
    }

    if log_file:
        # the file keeps block-level detail even when the console is quiet
        logging_config['handlers']['file'] = {
            'level': logging.DEBUG,
            'formatter': 'standard',
            'class': 'logging.FileHandler',
            'filename': log_file,
            'mode': 'a',
        }
        handlers.append('file')
        logging_config['loggers']['']['level'] = logging.DEBUG

    logging.config.dictConfig(logging_config)


def get_logger(name):
    return logging.getLogger(name)
