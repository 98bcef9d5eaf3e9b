"""Student-project preference data: rosters, preference matrix and loader."""
