"""API routes for branchreport."""
