"""Threshold handling

A threshold is a whole number with an optional unit suffix. Without a
suffix it's a number of seconds:

    >>> parse('90')
    (90, 'seconds')
    >>> parse('90s')
    (90, 'seconds')
    >>> parse('15m')
    (15, 'minutes')
    >>> parse('48h')
    (48, 'hours')
    >>> parse('95d')
    (95, 'days')

Other suffixes, or no number at all, can't be used:

    >>> parse('2w')
    Traceback (most recent call last):
    ...
    zc.nagiosplugins.plugin.UnknownError: could not determine unit of measurement as seconds/minutes/hours/days.
    >>> parse('h')
    Traceback (most recent call last):
    ...
    zc.nagiosplugins.plugin.UnknownError: could not determine unit of measurement as seconds/minutes/hours/days.

Warn and critical thresholds have to use the same unit:

    >>> Thresholds('24h', '2d')
    Traceback (most recent call last):
    ...
    zc.nagiosplugins.plugin.UnknownError: the warn threshold is in hours
    but the crit threshold is in days, please use consistent units of
    measurement for warn and crit.

When checking for old files, ages at or past a threshold are bad:

    >>> older = Thresholds('90d', '95d')
    >>> older.unit, older.warn, older.crit
    ('days', 90, 95)
    >>> [older.classify(age) for age in (3, 89, 90, 94, 95, 100)]
    [0, 0, 1, 1, 2, 2]

and warn has to come before crit:

    >>> Thresholds('95d', '95d')
    Traceback (most recent call last):
    ...
    zc.nagiosplugins.plugin.UnknownError: when the --older parameter is
    used, warn must be less than crit.

When checking for young files, ages at or below a threshold are bad:

    >>> younger = Thresholds('48h', '24h', 'younger')
    >>> [younger.classify(age) for age in (0, 1, 24, 25, 48, 49)]
    [2, 2, 2, 1, 1, 0]

    >>> Thresholds('24h', '48h', 'younger')
    Traceback (most recent call last):
    ...
    zc.nagiosplugins.plugin.UnknownError: when the --younger parameter is
    used, warn must be greater than crit.
"""
import logging
import re

from zc.nagiosplugins.plugin import OK, WARN, CRITICAL, UnknownError

logger = logging.getLogger(__name__)

OLDER = 'older'
YOUNGER = 'younger'

# checked in order, a bare number is seconds
suffixes = (
    ('', 'seconds'),
    ('s', 'seconds'),
    ('m', 'minutes'),
    ('h', 'hours'),
    ('d', 'days'),
    )

seconds_per = dict(seconds=1, minutes=60, hours=3600, days=86400)

threshold_parse = re.compile(r'([0-9]+)([a-z]?)$').match

def parse(text):
    """Return a threshold's value and unit"""
    m = threshold_parse(text.strip())
    if m is not None:
        value, suffix = m.groups()
        for s, unit in suffixes:
            if suffix == s:
                return int(value), unit

    raise UnknownError(
        "could not determine unit of measurement"
        " as seconds/minutes/hours/days.")

def older(age, warn, crit):
    if age >= crit:
        return CRITICAL
    if age >= warn:
        return WARN
    return OK

def younger(age, warn, crit):
    if age <= crit:
        return CRITICAL
    if age <= warn:
        return WARN
    return OK

modes = {OLDER: older, YOUNGER: younger}

preconditions = {
    OLDER: (lambda warn, crit: warn < crit, 'less than'),
    YOUNGER: (lambda warn, crit: warn > crit, 'greater than'),
    }

class Thresholds:

    def __init__(self, warn, crit, mode=OLDER):
        self.warn, warn_unit = parse(warn)
        self.crit, crit_unit = parse(crit)
        if warn_unit != crit_unit:
            raise UnknownError(
                "the warn threshold is in %s but the crit threshold is in %s,"
                " please use consistent units of measurement for warn and"
                " crit." % (warn_unit, crit_unit))
        self.unit = warn_unit

        ordered, relation = preconditions[mode]
        if not ordered(self.warn, self.crit):
            raise UnknownError(
                "when the --%s parameter is used, warn must be %s crit."
                % (mode, relation))
        self.mode = mode
        logger.debug("thresholds warn=%s crit=%s %s (%s)",
                     self.warn, self.crit, self.unit, mode)

    def classify(self, age):
        return modes[self.mode](age, self.warn, self.crit)
