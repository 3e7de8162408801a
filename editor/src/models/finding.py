"""Inspection findings stored in the draft payload.

Findings are kept as plain dicts in the payload (that is what the draft
store persists); these helpers build and reindex them.
"""

import uuid as uuid_module
from datetime import datetime, timezone

from constants import DEFAULT_FINDING_SEVERITY


def now_iso() -> str:
    return datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z')


def new_finding(photo_id: str) -> dict:
    """Empty finding attached to a photo."""
    stamp = now_iso()
    return {
        'id': str(uuid_module.uuid4()),
        'title': '',
        'severity': DEFAULT_FINDING_SEVERITY,
        'category': None,
        'location': None,
        'description': '',
        'tags': [],
        'photoId': photo_id,
        'photoIds': None,
        'annotations': [],
        'createdAt': stamp,
        'updatedAt': stamp,
    }


def reindex_annotations(findings, photo_id: str):
    """Renumber annotations of every finding on a photo as 1..n.

    Annotations are ordered per finding by their current index, and numbering
    continues across findings in list order.

    Returns:
        New findings list (findings on other photos are returned as-is)
    """
    stamp = now_iso()
    counter = 0
    result = []
    for finding in findings:
        if finding.get('photoId') != photo_id:
            result.append(finding)
            continue
        ordered = sorted(finding.get('annotations') or [], key=lambda a: a.get('index', 0))
        renumbered = []
        for annotation in ordered:
            counter += 1
            updated = dict(annotation)
            updated['index'] = counter
            renumbered.append(updated)
        updated_finding = dict(finding)
        updated_finding['annotations'] = renumbered
        updated_finding['updatedAt'] = stamp
        result.append(updated_finding)
    return result
