from datetime import timedelta
import getpass
import os

import six

from .parser import PARSER_MODE_DEBUG, PARSER_MODE_JES
from .service_layer.jes_client import LIST_LIMIT_MAX, LIST_LIMIT_MIN
from .session.ftp_session import DEFAULT_PORT

RC_FILE_HELP = """\
Sample rcfile:
    [server]
    host = mvs.example.com
    port = 21
    user = me  # default=$USER
    [jes]
    list limit = 1024  # 1..1024
    wait interval = 5  # seconds between two status checks
    wait timeout = 600  # seconds
    [parser]
    mode = jes|debug  # default=jes
"""

DEFAULT_WAIT_INTERVAL = 5.0
DEFAULT_WAIT_TIMEOUT = 600.0


class ConfigEnum(object):
    __slots__ = (
        'defaultName',
        '_enumVals',
    )

    def __init__(self, default, **enumVals):
        self._enumVals = enumVals
        assert default in enumVals
        self.defaultName = default
        for enumName in enumVals:
            assert enumName not in self.__slots__

    def names(self):
        return six.iterkeys(self._enumVals)

    def values(self):
        return six.itervalues(self._enumVals)

    @property
    def defaultVal(self):
        return self._enumVals[self.defaultName]

    def __getattr__(self, attr):
        assert attr != '_enumVals'
        if attr in self._enumVals:
            return self._enumVals[attr]
        else:
            return object.__getattribute__(self, attr)


PARSER_MODE = ConfigEnum(
    'JES',  # default
    JES=PARSER_MODE_JES,
    DEBUG=PARSER_MODE_DEBUG,
)


def _getConfig(cfgParser, section, option, defaultValue=None):
    if not cfgParser.has_section(section):
        return defaultValue
    if not cfgParser.has_option(section, option):
        return defaultValue
    return cfgParser.get(section, option)


def _getEnumConfig(cfgParser, section, option, enum):
    optionVal = _getConfig(
        cfgParser, section, option, enum.defaultVal)
    if optionVal not in list(enum.values()):
        raise ConfigError(
            "RC file has invalid \"{section}.{option}\" setting {optionVal}.  Valid "
            "options: {allowedVals}".format(
                section=section,
                option=option,
                optionVal=optionVal,
                allowedVals=", ".join(sorted(enum.values()))))

    return optionVal


def _getNumberConfig(cfgParser, section, option, default, convert,
                     minimum=None, maximum=None):
    # pylint: disable=too-many-arguments
    val = _getConfig(cfgParser, section, option, None)
    if val is None:
        return default
    try:
        number = convert(val)
    except ValueError:
        raise ConfigError(
            "RC file has invalid \"{section}.{option}\" setting {optionVal}.  "
            "Expected a number".format(
                section=section, option=option, optionVal=val)) from None
    if ((minimum is not None and number < minimum) or
            (maximum is not None and number > maximum)):
        raise ConfigError(
            "RC file has invalid \"{section}.{option}\" setting {optionVal}.  "
            "Valid range: {minimum}..{maximum}".format(
                section=section, option=option, optionVal=val,
                minimum=minimum, maximum=maximum))
    return number


class ConfigError(Exception):
    pass


class Config(object):
    # pylint: disable=too-many-instance-attributes
    validConfig = {
        'server': {'host', 'port', 'user'},
        'jes': {'list limit', 'wait interval', 'wait timeout'},
        'parser': {'mode'},
    }

    def _validateConfigParser(self, cfgParser):
        cfgSections = set(cfgParser.sections())
        unknownSections = cfgSections - set(self.validConfig.keys())
        if unknownSections:
            raise ConfigError(
                "RC file has unknown configuration sections: {}".format(
                    ", ".join(sorted(unknownSections))))
        for section in cfgSections:
            cfgValues = set(cfgParser.options(section))
            unknownOptions = cfgValues - self.validConfig[section]
            if unknownOptions:
                raise ConfigError(
                    "RC file has unknown configuration options in "
                    "section \"{}\": {}".format(
                        section, ", ".join(sorted(unknownOptions))))

    def __init__(self, options):
        stateDir = options.stateDir
        self.options = options
        self._logDir = os.path.expanduser(stateDir) + "/log/"

        rcFile = os.path.expanduser(options.rcFile)
        cfgParser = six.moves.configparser.RawConfigParser(
            inline_comment_prefixes=('#',))
        cfgParser.read(rcFile)
        self._validateConfigParser(cfgParser)

        self._host = _getConfig(cfgParser, "server", "host", None)
        self._port = _getNumberConfig(
            cfgParser, "server", "port", DEFAULT_PORT, int, 1, 65535)
        self._user = _getConfig(
            cfgParser, "server", "user", os.getenv('USER') or getpass.getuser())

        self._listLimit = _getNumberConfig(
            cfgParser, "jes", "list limit", LIST_LIMIT_MAX, int,
            LIST_LIMIT_MIN, LIST_LIMIT_MAX)
        self._waitInterval = _getNumberConfig(
            cfgParser, "jes", "wait interval", DEFAULT_WAIT_INTERVAL, float, 0)
        self._waitTimeout = _getNumberConfig(
            cfgParser, "jes", "wait timeout", DEFAULT_WAIT_TIMEOUT, float, 0)

        self._parserMode = _getEnumConfig(
            cfgParser, 'parser', 'mode', PARSER_MODE)

    @staticmethod
    def checkDir(dirName):
        if not os.access(dirName, os.W_OK | os.X_OK | os.R_OK):
            os.makedirs(dirName)
        return dirName

    @property
    def logDir(self):
        return self.checkDir(self._logDir)

    @property
    def host(self):
        return getattr(self.options, 'host', None) or self._host

    @property
    def port(self):
        return getattr(self.options, 'port', None) or self._port

    @property
    def user(self):
        return getattr(self.options, 'user', None) or self._user

    @property
    def listLimit(self):
        return self._listLimit

    @property
    def waitInterval(self):
        return timedelta(seconds=self._waitInterval)

    @property
    def waitTimeout(self):
        return timedelta(seconds=self._waitTimeout)

    @property
    def parserMode(self):
        return self._parserMode

    @property
    def parserDebug(self):
        return self._parserMode == PARSER_MODE_DEBUG
