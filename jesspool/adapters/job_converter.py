"""
Converters between Job objects and plain dictionaries.

The dictionaries only contain JSON compatible values, so they can be
dumped directly for machine readable output.
"""

from typing import Any, Dict

from jesspool.domain import Job, JobFlag, JobOutput, JobStatus


def job_output_to_dict(output: JobOutput) -> Dict[str, Any]:
    """
    Convert a JobOutput to a dictionary.

    Args:
        output: The output to convert

    Returns:
        Dictionary keyed by field name
    """
    return {
        "index": output.index,
        "name": output.name,
        "length": output.length,
        "step": output.step,
        "procedure_step": output.procedure_step,
        "output_class": output.output_class,
    }


def job_to_dict(job: Job) -> Dict[str, Any]:
    """
    Convert a Job, including its outputs, to a dictionary.

    Args:
        job: The Job to convert

    Returns:
        Dictionary keyed by field name; flags are sorted by name
    """
    return {
        "id": job.id,
        "name": job.name,
        "status": job.status.value,
        "owner": job.owner,
        "jes_class": job.jes_class,
        "result_code": job.result_code,
        "abend_code": job.abend_code,
        "flags": sorted(flag.name for flag in job.flags),
        "outputs": [job_output_to_dict(output) for output in job.outputs],
    }


def job_from_dict(data: Dict[str, Any]) -> Job:
    """
    Convert a dictionary created by job_to_dict back to a Job.

    Raises:
        FieldInconsistencyError: if the values violate a Job invariant
    """
    job = Job(
        id=data["id"],
        name=data["name"],
        status=JobStatus(data["status"]),
        owner=data["owner"],
        jes_class=data.get("jes_class"),
        result_code=data.get("result_code"),
        abend_code=data.get("abend_code"),
        flags=[JobFlag[name] for name in data.get("flags", [])],
    )

    for output in data.get("outputs", []):
        job.create_output(
            index=output["index"],
            name=output["name"],
            length=output["length"],
            step=output.get("step"),
            procedure_step=output.get("procedure_step"),
            output_class=output.get("output_class"),
        )
    return job
