"""Default HTML report template.

Placeholders are ``str.format`` fields; every value is HTML-escaped before
substitution. ``{findings}`` receives the rendered finding rows.
"""

from __future__ import annotations

REPORT_TEMPLATE = """\
<h1>{title}</h1>
<p><b>Applicant:</b> {name}<br>
<b>Organization:</b> {company}<br>
<b>Filing date:</b> {register_date}<br>
<b>Registration:</b> {registration}<br>
<b>Report date:</b> {now_date}</p>
<h2>Summary of the invention</h2>
<p>{summary}</p>
<hr>
<h2>Cited prior art</h2>
{findings}
<h2>Opinion</h2>
<p>{opinion}</p>
<p><b>Registration probability:</b> {probability}</p>
"""

FINDING_TEMPLATE = """\
<li><b>{index}</b> - {name} (registration {registration})</li>
"""

NO_FINDINGS = "<p>No comparable prior art was found.</p>\n"
