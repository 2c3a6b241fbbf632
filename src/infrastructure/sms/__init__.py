from .regex_parser import RegexSmsParser
from .polling_source import PollingMessageSource, ListenerState
from .json_inbox import JsonFileSmsInbox

__all__ = ["RegexSmsParser", "PollingMessageSource", "ListenerState", "JsonFileSmsInbox"]
