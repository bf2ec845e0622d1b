r"""Nagios performance data

Performance data are ``label=value;warn;crit;min;max`` tokens, with empty
trailing fields left blank:

    >>> format_perfdata('file_age_days', 3, 90, 95, 0)
    'file_age_days=3;90;95;0;'
    >>> format_perfdata('rta', 0.8)
    'rta=0.8;;;;'

Labels with spaces or equal signs are quoted:

    >>> format_perfdata('ha ha', 3)
    "'ha ha'=3;;;;"

See: https://nagios-plugins.org/doc/guidelines.html#AEN200
"""

import re

def format_perfdata(label, value, warn='', crit='', min='', max=''):
    if re.search(r"[ \t='|]", label):
        label = "'%s'" % label.replace("'", "")
    return '%s=%s;%s;%s;%s;%s' % (label, value, warn, crit, min, max)
