"""
logger.py

Logging module for huffcodec.


"""


from datetime import datetime
from typing import Union, Optional

class LogLevel:
    INFO = 0
    WARNING = 1
    ERROR = 2
    PROGRESS = 3


class Log:
    def __init__(self, type_name: str, level: int, message: str) -> None:
        self.level = level
        self.type_name = type_name
        self.message = message
        self.date = datetime.now()

    def __str__(self) -> str:
        return f"{self.date} - {self.type_name} - {self.level} - {self.message}"

    def __repr__(self) -> str:
        return self.__str__()


class FrequencyAnalysisLog(Log):
    def __init__(self, distinct_symbols: int, total_symbols: int) -> None:
        self.distinct_symbols = distinct_symbols
        self.total_symbols = total_symbols
        super().__init__("Frequency_analysis_log", LogLevel.INFO, f"Distinct symbols: {distinct_symbols}, Total symbols: {total_symbols}")


class TreeConstructionLog(Log):
    def __init__(self, depth: int, leaf_count: int) -> None:
        self.depth = depth
        self.leaf_count = leaf_count
        super().__init__("Tree_construction_log", LogLevel.INFO, f"Depth: {depth}, Leaves: {leaf_count}")


class SymbolCodeLog(Log):
    def __init__(self, symbol: any, frequency: int, code: str) -> None:
        self.symbol = symbol
        self.frequency = frequency
        self.code = code
        self.code_length = len(code)
        super().__init__("Symbol_code_log", LogLevel.INFO, f"Symbol: {symbol}, Frequency: {frequency}, Code: {code}")


class CodingLog(Log):
    def __init__(self, symbol_size: int, encoded_size: int) -> None:
        self.symbol_size = symbol_size
        self.encoded_size = encoded_size
        super().__init__("Coding_log", LogLevel.INFO, f"Symbol size: {symbol_size}, Encoded size: {encoded_size}")


class CodingProgressStep(Log):
    def __init__(self, message: str, total_steps: Optional[int] = None) -> None:
        self.base_message = message
        self.total_steps = total_steps
        super().__init__("Coding_progress_step", LogLevel.PROGRESS, message)


class DecodingProgressStep(Log):
    def __init__(self, message: str, total_steps: Optional[int] = None) -> None:
        self.base_message = message
        self.total_steps = total_steps
        super().__init__("Decoding_progress_step", LogLevel.PROGRESS, message)


class Logger:
    def __init__(self) -> None:
        self.coding_progress_count = 0
        self.decoding_progress_count = 0

        self.logs = []

        self.record_info = True
        self.record_warning = True
        self.record_error = True
        self.record_progress = False

        self.display_info = False
        self.display_warning = True
        self.display_error = True
        self.display_progress = True

        self.coding_step_interval_count = 100
        self.decoding_step_interval_count = 100

    def _log_progress(self, log: Log, count: int, interval: int) -> None:
        if log.total_steps is not None:
            log.message = f"{log.base_message} ({count}/{log.total_steps})"
        else:
            log.message = f"{log.base_message} ({count})"
        if self.record_progress:
            self.logs.append(log)
        if self.display_progress and (count % interval == 0):
            print(log)

    def log(self, log: Union[Log, str]) -> None:
        if not (isinstance(log, Log) or isinstance(log, str)):
            raise ValueError("Log must be an instance of Log class or a string")
        if isinstance(log, str):
            log = Log("General", LogLevel.INFO, log)

        if log.level == LogLevel.INFO:
            if self.record_info:
                self.logs.append(log)
            if self.display_info:
                print(log)
        elif log.level == LogLevel.WARNING:
            if self.record_warning:
                self.logs.append(log)
            if self.display_warning:
                print(log)
        elif log.level == LogLevel.ERROR:
            if self.record_error:
                self.logs.append(log)
            if self.display_error:
                print(log)
        elif log.level == LogLevel.PROGRESS:
            if isinstance(log, CodingProgressStep):
                self.coding_progress_count += 1
                self._log_progress(log, self.coding_progress_count, self.coding_step_interval_count)
            elif isinstance(log, DecodingProgressStep):
                self.decoding_progress_count += 1
                self._log_progress(log, self.decoding_progress_count, self.decoding_step_interval_count)

    def warning(self, type_name: str, message: str) -> None:
        self.log(Log(type_name, LogLevel.WARNING, message))

    def error(self, type_name: str, message: str) -> None:
        self.log(Log(type_name, LogLevel.ERROR, message))

    def save(self, file_path: str) -> None:
        with open(file_path, 'w') as file:
            for log in self.logs:
                file.write(str(log) + "\n")
