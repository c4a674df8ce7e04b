"""Formatting layer - classification, time, tags, sections, links and assembly."""

from heartbeat_notifier.formatter.assembler import MessageAssembler
from heartbeat_notifier.formatter.classifier import AlertClassifier, StatusClassification
from heartbeat_notifier.formatter.links import ActionLinkBuilder, extract_address
from heartbeat_notifier.formatter.sections import SectionFormatter, SectionLayout
from heartbeat_notifier.formatter.tags import TagPrioritizer
from heartbeat_notifier.formatter.timefmt import TimeFormatter
from heartbeat_notifier.formatter.timezones import TimezoneDirectory

__all__ = [
    "ActionLinkBuilder",
    "AlertClassifier",
    "MessageAssembler",
    "SectionFormatter",
    "SectionLayout",
    "StatusClassification",
    "TagPrioritizer",
    "TimeFormatter",
    "TimezoneDirectory",
    "extract_address",
]
