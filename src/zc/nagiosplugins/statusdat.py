r"""Parse Nagios status.dat snapshots into (kind, dict) blocks

    >>> blocks = parse_text('''\
    ... # NAGIOS STATUS FILE
    ... info {
    ... \tcreated=1418487287
    ... \t}
    ...
    ... hoststatus {
    ... \thost_name=web1.example.com
    ... \tnotification_period=24x7
    ... \tnotifications_enabled=0
    ... \tplugin_output=PING OK - rta=0.8 ms
    ... \t}
    ... ''')
    >>> for kind, data in blocks:
    ...     print(kind, sorted(data.items()))
    info [('created', '1418487287')]
    hoststatus [('host_name', 'web1.example.com'),
                ('notification_period', '24x7'),
                ('notifications_enabled', '0'),
                ('plugin_output', 'PING OK - rta=0.8 ms')]

A truncated snapshot (nagios rewrites it in place) loses its last block:

    >>> parse_text('info {\n\tcreated=1\n')
    []
"""
import logging

logger = logging.getLogger(__name__)

def parse_lines(lines):
    kind = data = None
    for line in lines:
        line = line.strip()
        if not line or line.startswith('#'):
            continue
        if line.endswith('{'):
            kind = line[:-1].strip()
            data = {}
        elif line == '}':
            if kind is not None:
                yield kind, data
            kind = data = None
        elif data is not None and '=' in line:
            key, value = line.split('=', 1)
            data[key] = value

def parse_text(text):
    return list(parse_lines(text.split('\n')))

def parse_file(name):
    with open(name, encoding='utf-8', errors='replace') as f:
        blocks = list(parse_lines(f))
    logger.debug("read %d blocks from %s", len(blocks), name)
    return blocks
