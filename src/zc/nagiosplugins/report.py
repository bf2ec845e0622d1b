"""Email a report of Nagios hosts and services with notifications disabled

Meant to run daily from the nagios user's crontab, as a reminder to turn
notifications back on. See report.rst.
"""
import email.mime.text
import html
import logging
import os
import socket
import subprocess
import sys
import time

import zc.nagiosplugins.plugin
import zc.nagiosplugins.statusdat
from zc.nagiosplugins.plugin import OK, CheckExit, UnknownError

logger = logging.getLogger(__name__)

NAME = 'NOTIFICATIONS'
SCRIPT = 'nagios_notification_report'

enabled_names = {'0': 'no', '1': 'yes'}
enabled_colors = dict(no='red', yes='green')

def notification_rows(blocks, kind, fields):
    rows = []
    for block_kind, data in blocks:
        if block_kind != kind:
            continue
        row = dict((field, data.get(field) or 'unknown') for field in fields)
        row['notifications_enabled'] = enabled_names.get(
            data.get('notifications_enabled'), 'unknown')
        rows.append(row)
    return rows

def disabled_hosts(blocks):
    rows = notification_rows(
        blocks, 'hoststatus', ('host_name', 'notification_period'))
    # a host listed more than once is described by its last block
    rows = dict((row['host_name'], row) for row in rows).values()
    return sorted((row for row in rows
                   if row['notifications_enabled'] == 'no'),
                  key=lambda row: row['host_name'])

def disabled_services(blocks):
    rows = notification_rows(
        blocks, 'servicestatus',
        ('host_name', 'service_description', 'notification_period'))
    return sorted((row for row in rows
                   if row['notifications_enabled'] == 'no'),
                  key=lambda row: (row['host_name'],
                                   row['service_description']))

header = """\
<html><head><title>Status Report</title></head><body>
<br>This report is generated by the %(script)s script on %(hostname)s
<br>Last updated %(updated)s
<p>&nbsp;</p>
<hr>
<br><b>How to use this report</b>
<ul>
<li>This daily report is to remind the nagios sysadmins to re-enable any \
notifications that may have been accidentally turned off.
<li>The enabled nagios notifications are not shown in this report in order \
to keep the report length to a reasonable size.
<li>If you see any <font color=red>red</font> warnings, please login to \
nagios at %(url)s to confirm that those notifications are supposed to be \
disabled.
<li>If you do not see any <font color=red>red</font> warnings, no further \
action is needed.
</ul><hr>
"""

def table(title, columns, rows, fields):
    lines = [
        '<table border=1>',
        '<tr bgcolor=gray><td colspan=%d> %s' % (len(columns), title),
        '<tr bgcolor=gray>' + ' '.join('<td> %s' % c for c in columns),
        ]
    for row in rows:
        cells = ['<td bgcolor=white> %s' % html.escape(row[field])
                 for field in fields]
        enabled = row['notifications_enabled']
        cells.append('<td bgcolor=%s> %s' % (
            enabled_colors.get(enabled, 'white'), enabled))
        lines.append('<tr>' + ' '.join(cells))
    lines.append('</table><p>&nbsp;</p>')
    return '\n'.join(lines) + '\n'

def render(hosts, services, url, hostname, now=None):
    if now is None:
        now = time.time()
    return (
        header % dict(
            script=SCRIPT,
            hostname=html.escape(hostname),
            updated=time.strftime('%Y-%m-%d %H:%M', time.localtime(now)),
            url=html.escape(url),
            )
        + table('Nagios hosts',
                ('Hostname', 'Notification Period', 'Notifications Enabled'),
                hosts, ('host_name', 'notification_period'))
        + table('Nagios services',
                ('Hostname', 'Service Description', 'Notification Period',
                 'Notifications Enabled'),
                services,
                ('host_name', 'service_description', 'notification_period'))
        + '</body></html>\n'
        )

class Sendmail:
    """Hand the report to the local sendmail binary
    """

    def __init__(self, config):
        self.command = config.get('sendmail', '/usr/sbin/sendmail')

    def send(self, to, sender, subject, body):
        message = email.mime.text.MIMEText(body, 'html', 'utf-8')
        message['To'] = to
        message['From'] = sender
        message['Subject'] = subject
        logger.debug("piping report to %s -t", self.command)
        try:
            subprocess.run(
                [self.command, '-t'], input=message.as_bytes(),
                stdout=subprocess.PIPE, stderr=subprocess.PIPE, check=True)
        except OSError as v:
            raise UnknownError("could not send report: %s" % v)
        except subprocess.CalledProcessError as v:
            raise UnknownError("could not send report: %s %s" % (
                v, v.stderr.decode('utf-8', 'replace').strip()))

def read_status(path):
    if not os.path.isfile(path):
        raise UnknownError("cannot locate %s" % path)
    if not os.access(path, os.R_OK):
        raise UnknownError("%s is not readable by the current user" % path)
    return zc.nagiosplugins.statusdat.parse_file(path)

def main(args=None):
    if args is None:
        args = sys.argv[1:]

    parser = zc.nagiosplugins.plugin.ArgumentParser(
        NAME, prog=SCRIPT,
        description='Email a report of disabled Nagios notifications.')
    parser.add_argument(
        '--status-dat', default='/var/log/nagios/status.dat',
        help='nagios status file (default: %(default)s)')
    parser.add_argument(
        '--to', required=True, help='report recipients, comma separated')
    parser.add_argument(
        '--from', dest='sender', required=True, help='report sender')
    parser.add_argument(
        '--subject', default='daily nagios notification report',
        help='(default: %(default)s)')
    parser.add_argument(
        '--url', default='the monitoring web interface',
        help='where to log in to nagios, shown in the report')
    parser.add_argument(
        '--output', help='also write the HTML report to this file')
    parser.add_argument(
        '--sendmail', default='/usr/sbin/sendmail',
        help='(default: %(default)s)')
    parser.add_argument(
        '--mailer', default='zc.nagiosplugins.report:Sendmail',
        help='mail handler, as module:factory (default: %(default)s)')

    args = parser.parse_args(args)

    try:
        zc.nagiosplugins.plugin.configure_logging(args.logging, args.verbose)
        blocks = read_status(args.status_dat)
        hosts = disabled_hosts(blocks)
        services = disabled_services(blocks)
        logger.debug("%d hosts and %d services with notifications disabled",
                     len(hosts), len(services))
        body = render(hosts, services, args.url,
                      socket.gethostname().split('.')[0])
        if args.output:
            try:
                with open(args.output, 'w') as f:
                    f.write(body)
            except OSError as v:
                raise UnknownError(
                    "could not write %s: %s" % (args.output, v.strerror))
        mailer = zc.nagiosplugins.plugin.load_handler(
            args.mailer, dict(sendmail=args.sendmail))
        mailer.send(args.to, args.sender, args.subject, body)
    except CheckExit as v:
        return zc.nagiosplugins.plugin.report(NAME, v.status, str(v))

    return zc.nagiosplugins.plugin.report(
        NAME, OK,
        "sent notification report to %s: %d hosts and %d services"
        " with notifications disabled" % (
            args.to, len(hosts), len(services)))

if __name__ == '__main__':
    sys.exit(main())
