import datetime
import logging

import chardet
import dateutil.tz
from six import text_type

DATETIME_FMT = "%a %b %e, %Y %X %Z"

SPACER_EACH = "========================================"

LOG = logging.getLogger(__name__)


def strForEach(value):
    try:
        return text_type(value)
    except (UnicodeDecodeError, UnicodeEncodeError):
        LOG.debug("%r", value, exc_info=1)
        return '{!r}'.format(value)


def sprint(*args, **kwargs):
    """sprint: "safe" print - ignore IOError"""
    try:
        print(*[strForEach(arg) for arg in args], **kwargs)
    except IOError:
        LOG.debug("sprint ignore IOError", exc_info=1)
    except (UnicodeEncodeError, UnicodeDecodeError):
        print('codec error', repr(args))
        LOG.debug("%r", args, exc_info=1)


def utcNow():
    return datetime.datetime.now(dateutil.tz.tzutc())


def localTimeStr(dtObj=None):
    if dtObj is None:
        dtObj = utcNow()
    return dtObj.astimezone(dateutil.tz.tzlocal()).strftime(DATETIME_FMT)


def autoDecode(byteArray):
    if not byteArray:
        return ''
    detected = chardet.detect(byteArray)
    encoding = detected['encoding']
    if encoding is None or detected['confidence'] < 0.5:  # very arbitrary
        encoding = 'utf-8'
    return byteArray.decode(encoding, errors='replace')
