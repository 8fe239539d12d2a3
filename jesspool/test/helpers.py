from contextlib import contextmanager
import os
import sys

from six.moves import StringIO

HOME = '/home/me'
USER = 'me'

FTP_INPUT_DIR = os.path.join(os.path.dirname(__file__), 'ftp_input')


def resetEnv():
    os.environ['HOME'] = HOME
    os.environ['USER'] = USER
    os.environ['JES_SPOOL_STATE_DIR'] = '/tmp/BADDIR'
    if 'JES_PASSWORD' in os.environ:
        del os.environ['JES_PASSWORD']


def ftpInputLines(name):
    '''Physical lines of a listing stored below ftp_input/'''
    with open(os.path.join(FTP_INPUT_DIR, name), encoding='utf-8') as inputFp:
        return inputFp.read().splitlines()


@contextmanager
def capturedOutput():
    ''' Used to capture stdout or stderr.
    eg.
    with capturedOutput() as (out, err):
        print("foo")

    self.assertEqual(out.getvalue(), "foo")
    '''
    newOut, newErr = StringIO(), StringIO()
    oldOut, oldErr = sys.stdout, sys.stderr
    try:
        sys.stdout, sys.stderr = newOut, newErr
        yield sys.stdout, sys.stderr
    finally:
        sys.stdout, sys.stderr = oldOut, oldErr
