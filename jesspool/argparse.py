import os


def addArgumentParserBaseFlags(parser, logfileName):
    '''
    Adds the flags shared by all scripts included with jesspool to
    ``parser``: config file overrides, server selection, debugging.

    Provides ALL flags required by the Config class.
    '''
    parser.add_argument(
        "-v",
        dest="verbose",
        help="Increase verbosity (multiple times for more verbose)",
        action="append_const",
        const=1)
    parser.add_argument(
        "-d",
        "--state-dir",
        dest='stateDir',
        metavar="DIR",
        help="Specify state directory (default='%(default)s')",
        default=os.getenv('JES_SPOOL_STATE_DIR', "~/.local/share/jesspool"))
    parser.add_argument("--rc-file", dest="rcFile",
                        help="Specify path to rc-file (default=\"%(default)s\")",
                        default="~/.config/jesrc")
    parser.add_argument("-H", "--host", help="FTP server host name")
    parser.add_argument("-p", "--port", type=int, help="FTP server port")
    parser.add_argument("-u", "--user", help="User name to log in with")
    parser.add_argument(
        "--debug",
        nargs="?",
        const=True,
        default=False,
        metavar="FILE",
        help="enable debug output to <state-dir>/log/%s.log "
             "(or FILE)" % logfileName)
