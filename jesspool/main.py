#!/usr/bin/env python
import argparse
from datetime import timedelta
import ftplib
import getpass
import os
import sys

import simplejson as json

import jesspool.logging

from .adapters import job_to_dict
from .argparse import addArgumentParserBaseFlags
from .binutils import binDescriptionWithStandardFooter
from .config import Config, ConfigError
from .domain import FILTER_WILDCARD, Job, JobStatus
from .errors import JesError, LimitReachedError, SessionError
from .parser import create_entry_parser
from .service_layer import JesClient
from .service_layer.waiting import sleep
from .session import FtpSession
from .utils import SPACER_EACH, localTimeStr, sprint

_DEBUG_LOG_FILE_NAME = "jesspool-debug"
LOG = jesspool.logging.getLogger(__name__)

RC_LIMIT_REACHED = 2
RC_TIMEOUT = 3


class NoMatchingJobError(JesError):
    pass


def getPassword(user):
    password = os.getenv('JES_PASSWORD')
    if password is None:
        password = getpass.getpass("Password for %s: " % user)
    return password


def connect(config):
    if not config.host:
        raise ConfigError("No host configured, use --host or the rc file")
    LOG.debug("connecting to %s:%s as %s", config.host, config.port, config.user)
    if config.parserDebug:
        LOG.warning("debug parser selected, listings fail echoing the server output")
    try:
        session = FtpSession(config.host, config.port)
    except (OSError, EOFError, ftplib.Error) as error:
        raise SessionError("Connecting to {}:{} failed: {}",
                           config.host, config.port, error) from error
    client = JesClient(session, parser=create_entry_parser(config.parserMode))
    try:
        client.login(config.user, getPassword(config.user))
    except BaseException:
        LOG.debug("login failed", exc_info=1)
        client.close()
        raise
    return client


def findJob(client, jobId):
    job = client.get_job_details(
        Job(id=jobId, name=FILTER_WILDCARD, status=JobStatus.ALL,
            owner=FILTER_WILDCARD))
    if job is None:
        raise NoMatchingJobError("No job for id '{}'", jobId)
    return job


def dumpJson(obj):
    sprint(json.dumps(obj, indent=2))


def outputLine(output):
    return "  {:3d} {:8} {:8} {:1} {:8} {:>10}".format(
        output.index, output.step or "", output.procedure_step or "",
        output.output_class or "", output.name, output.length)


def showJobs(jobs, asJson=False):
    if asJson:
        dumpJson([job_to_dict(job) for job in jobs])
        return
    for job in jobs:
        sprint(job)
        for output in job.outputs:
            sprint(outputLine(output))


def cmdList(client, options, config):
    limit = options.limit or config.listLimit
    status = JobStatus(options.status)
    listFunc = client.list if options.ids else client.list_filled
    try:
        jobs = listFunc(options.name, status, options.owner, limit)
    except LimitReachedError as error:
        LOG.debug("limit reached", exc_info=1)
        showJobs(error.jobs, options.json)
        sprint("WARNING: listing limit of %d reached, output is incomplete" %
               error.limit, file=sys.stderr)
        return RC_LIMIT_REACHED
    showJobs(jobs, options.json)
    return 0


def cmdShow(client, options, _config):
    showJobs([findJob(client, options.id)], options.json)
    return 0


def cmdWait(client, options, config):
    job = findJob(client, options.id)
    interval = config.waitInterval
    timeout = config.waitTimeout
    if options.interval is not None:
        interval = timedelta(seconds=options.interval)
    if options.timeout is not None:
        timeout = timedelta(seconds=options.timeout)
    return waitForJob(client, job, interval, timeout, options.verbose)


def waitForJob(client, job, interval, timeout, verbose):
    def waitStep(duration):
        if verbose:
            sys.stdout.write(".")
            sys.stdout.flush()
        sleep(duration)

    if verbose:
        sprint("Waiting for job %s" % job.id)
    try:
        finished = client.wait_for(job, interval, timeout, wait=waitStep)
    except KeyboardInterrupt:
        LOG.info("return 1 after interrupt", exc_info=True)
        return 1
    if not finished:
        sprint("\nTimeout waiting for job %s after %s" % (job.id, timeout))
        return RC_TIMEOUT
    done = client.get_job_details(job) or job
    sprint("\nFinished %s at %s" % (done, localTimeStr()))
    return 0


def cmdFetch(client, options, _config):
    job = findJob(client, options.id)
    outputs = job.outputs
    if options.index is not None:
        outputs = [output for output in outputs if output.index == options.index]
        if not outputs:
            raise NoMatchingJobError(
                "Job '{}' has no output {}", job.id, options.index)
    for output in outputs:
        if len(outputs) > 1:
            sprint(SPACER_EACH)
            sprint(outputLine(output))
            sprint(SPACER_EACH)
        sprint(client.retrieve(output))
    return 0


def cmdSubmit(client, options, config):
    with open(options.file, encoding='utf-8') as jclFp:
        jcl = jclFp.read()
    job = client.submit(jcl)
    sprint(job.id)
    if options.wait:
        return waitForJob(client, job, config.waitInterval, config.waitTimeout,
                          options.verbose)
    return 0


def cmdDelete(client, options, _config):
    client.delete(findJob(client, options.id))
    return 0


def cmdProperties(client, options, _config):
    properties = client.get_server_properties()
    if options.json:
        dumpJson(properties)
    else:
        for key, value in properties.items():
            sprint("%s=%s" % (key, value))
    return 0


def parseArgs(args=None):
    op = argparse.ArgumentParser(
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description=binDescriptionWithStandardFooter(
            "List, inspect, fetch and wait for jobs on a z/OS JES spool."))
    addArgumentParserBaseFlags(op, _DEBUG_LOG_FILE_NAME)
    sub = op.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    listOp = sub.add_parser("list", help="List jobs")
    listOp.add_argument("name", nargs="?", default=FILTER_WILDCARD,
                        help="Job name filter (default='%(default)s')")
    listOp.add_argument("-s", "--status", default=JobStatus.ALL.value,
                        type=str.upper,
                        choices=[s.value for s in JobStatus],
                        help="Status filter (default=%(default)s)")
    listOp.add_argument("-o", "--owner", default=FILTER_WILDCARD,
                        help="Owner filter (default='%(default)s')")
    listOp.add_argument("-n", "--limit", type=int,
                        help="Maximum number of jobs to list")
    listOp.add_argument("--ids", action="store_true",
                        help="List job ids only, without details")
    listOp.add_argument("--json", action="store_true", help="JSON output")
    listOp.set_defaults(func=cmdList)

    showOp = sub.add_parser("show", help="Show job details and outputs")
    showOp.add_argument("id", help="Job id")
    showOp.add_argument("--json", action="store_true", help="JSON output")
    showOp.set_defaults(func=cmdShow)

    waitOp = sub.add_parser("wait", help="Wait for a job to finish")
    waitOp.add_argument("id", help="Job id")
    waitOp.add_argument("-i", "--interval", type=float,
                        help="Seconds between two status checks")
    waitOp.add_argument("-t", "--timeout", type=float,
                        help="Seconds to wait at most")
    waitOp.set_defaults(func=cmdWait)

    fetchOp = sub.add_parser("fetch", help="Print job output content")
    fetchOp.add_argument("id", help="Job id")
    fetchOp.add_argument("index", nargs="?", type=int,
                         help="Output index (default: all outputs)")
    fetchOp.set_defaults(func=cmdFetch)

    submitOp = sub.add_parser("submit", help="Submit JCL")
    submitOp.add_argument("file", help="JCL file")
    submitOp.add_argument("-w", "--wait", action="store_true",
                          help="Wait for the job to finish")
    submitOp.set_defaults(func=cmdSubmit)

    deleteOp = sub.add_parser("delete", help="Purge a job from the spool")
    deleteOp.add_argument("id", help="Job id")
    deleteOp.set_defaults(func=cmdDelete)

    propOp = sub.add_parser("properties", help="Show server site variables")
    propOp.add_argument("--json", action="store_true", help="JSON output")
    propOp.set_defaults(func=cmdProperties)

    return op.parse_args(args)


def impl_main(args=None):
    options = parseArgs(args)
    config = Config(options)

    jesspool.logging.setup(
        config.logDir,
        _DEBUG_LOG_FILE_NAME,
        debug=options.debug)
    LOG.debug("starting with args %s", options)
    LOG.debug("python: %s", sys.version)

    with connect(config) as client:
        return options.func(client, options, config)


def main(args=None):
    try:
        rc = impl_main(args)
    except (ConfigError, JesError) as error:
        LOG.debug("failed", exc_info=1)
        sprint("Error:", error, file=sys.stderr)
        sys.exit(1)
    sys.exit(rc)


if __name__ == "__main__":
    main()
