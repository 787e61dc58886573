"""Version specifiers, package identities and semver parsing."""
