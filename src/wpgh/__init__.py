"""wpgh: commit WordPress plugin/theme installs and updates to git, one asset per commit."""
