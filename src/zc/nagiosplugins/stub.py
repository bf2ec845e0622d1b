"""Stub plugin implementations for testing and debugging
"""

class OutputMailer:

    def __init__(self, config):
        self.config = config

    def log(self, *args):
        print(self.__class__.__name__, ' '.join(args))

    def send(self, to, sender, subject, body):
        self.log('send', to, sender, subject)
        print(body, end='')
