"""Plugin APIs.

Don't import this module unless you have zope.interface in the path.
zc.nagiosplugins doesn't import this module, nor does it depend on
zope.interface.
"""

import zope.interface

class IMailer(zope.interface.Interface):
    """Deliver a report

    Mailers are created by calling a factory, named with a
    ``module:name`` string, with a dictionary of options.
    """

    def send(to, sender, subject, body):
        """Send an HTML body with the given subject.

        ``to`` may be several comma-separated addresses.

        Failures to deliver are raised as
        zc.nagiosplugins.plugin.UnknownError, so the report ends with an
        UNKNOWN status.
        """
