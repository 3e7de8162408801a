"""Inspection findings editing for the editor store"""

from models.finding import new_finding, now_iso, reindex_annotations


class FindingsMixin:
	"""Findings live beside the draft and are written into payload.findings on save"""

	def _commit_findings(self, findings):
		self.findings = findings
		self.draftChanged.emit()
		self.save_debounced()

	def set_findings(self, findings):
		self.mark()
		self._commit_findings(list(findings or []))

	def create_findings_from_photos(self, photo_ids):
		"""Append one empty finding per photo

		Returns:
			Ids of the created findings
		"""
		if not photo_ids:
			return []
		self.mark()
		created = [new_finding(photo_id) for photo_id in photo_ids]
		self._commit_findings(list(self.findings) + created)
		return [f['id'] for f in created]

	def update_finding(self, finding_id, patch):
		"""Shallow-merge a patch into a finding (coalesced)"""
		index = next((i for i, f in enumerate(self.findings) if f.get('id') == finding_id), -1)
		if index < 0:
			self._logger.debug(f"update_finding: unknown finding {finding_id}")
			return
		self.mark(coalesce=True)
		findings = list(self.findings)
		updated = dict(findings[index])
		updated.update(patch or {})
		updated['updatedAt'] = now_iso()
		findings[index] = updated
		self._commit_findings(findings)

	def delete_finding(self, finding_id):
		if not any(f.get('id') == finding_id for f in self.findings):
			return
		self.mark()
		self._commit_findings([f for f in self.findings if f.get('id') != finding_id])

	def reindex_annotations(self, photo_id):
		"""Renumber all annotations on a photo densely from 1"""
		self.mark()
		self._commit_findings(reindex_annotations(self.findings, photo_id))
