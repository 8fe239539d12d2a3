from jesspool.config import RC_FILE_HELP


def binDescriptionWithStandardFooter(desc):
    return """{desc}


Configuration:
    The default configuration file location is `~/.config/jesrc`, but can be
    overwritten using the --rc-file option.

    The password is read from the JES_PASSWORD environment variable, or
    prompted for if it is not set.

{rcfile}
""".format(desc=desc.strip(), rcfile=RC_FILE_HELP)
