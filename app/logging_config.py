import logging
import logging.config
import os
import re
from logging.handlers import TimedRotatingFileHandler

import sqlparse
from sqlalchemy import Engine, event
from uvicorn.config import LOGGING_CONFIG

from app.database import ENDPOINT_QUERY_MARK

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# uvicorn keeps its own dictConfig; give both of its formatters a timestamp
for formatter_name in ("default", "access"):
    LOGGING_CONFIG["formatters"][formatter_name] = {
        "format": LOG_FORMAT,
        "datefmt": LOG_DATE_FORMAT,
    }

logging.basicConfig(format=LOG_FORMAT, level=logging.INFO)
logging.config.dictConfig(LOGGING_CONFIG)

log_dir = os.getenv("LOG_DIR", "logs")
os.makedirs(log_dir, exist_ok=True)

log_file_handler = TimedRotatingFileHandler(
    filename=os.path.join(log_dir, os.getenv("LOG_FILE", "dfw_parking.log")),
    when="midnight",
    interval=1,
    backupCount=int(os.getenv("LOG_BACKUP_COUNT", "14")),
)
log_file_handler.setFormatter(logging.Formatter(LOG_FORMAT, LOG_DATE_FORMAT))
log_file_handler.setLevel(logging.INFO)

root_logger = logging.getLogger()
root_logger.addHandler(log_file_handler)
root_logger.setLevel(logging.INFO)

# access log goes to the file only
uvicorn_access_logger = logging.getLogger("uvicorn.access")
uvicorn_access_logger.addHandler(log_file_handler)
uvicorn_access_logger.setLevel(logging.INFO)
uvicorn_access_logger.propagate = False

uvicorn_error_logger = logging.getLogger("uvicorn.error")
uvicorn_error_logger.addHandler(log_file_handler)
uvicorn_error_logger.setLevel(logging.INFO)

sql_logger = logging.getLogger("app.sql")

root_logger.info("Logging is configured. Logs will be saved to: %s", log_dir)


def format_sql_statement(statement: str) -> str:
    return sqlparse.format(statement, reindent=True, keyword_case='upper')


def bind_params(statement, parameters):
    """
    Inlines named (%(name)s) and qmark (?) parameters so the logged statement
    can be pasted into a SQL console.
    """
    if isinstance(parameters, dict):
        def replace(match):
            key = match.group(1)
            return repr(parameters[key]) if key in parameters else match.group(0)

        return re.sub(r'%\((\w+)\)s', replace, statement)

    if isinstance(parameters, (list, tuple)):
        values = iter(parameters)
        return re.sub(r'\?', lambda _: repr(next(values, '?')), statement)

    return statement


def before_cursor_execute(conn, cursor, statement, parameters, context, executemany):
    if executemany and isinstance(parameters, list):
        for param_set in parameters:
            statement = bind_params(statement, param_set)
    else:
        statement = bind_params(statement, parameters)

    formatted_sql = format_sql_statement(statement)
    # plain selects are noisy; only the ones marked by an endpoint are logged
    if formatted_sql.lower().startswith("select"):
        if ENDPOINT_QUERY_MARK in formatted_sql:
            sql_logger.info(f"Executing SQL:\n{formatted_sql}")
    else:
        sql_logger.info(f"Executing SQL:\n{formatted_sql}")


def configure_sql_logging(engine: Engine):
    """
    SQLAlchemy's own engine logger only reports warnings; statements are
    logged through cursor events after parameters are bound.
    """
    logging.getLogger('sqlalchemy.engine').setLevel(logging.WARNING)
    if not event.contains(engine, "before_cursor_execute", before_cursor_execute):
        event.listen(engine, "before_cursor_execute", before_cursor_execute)
