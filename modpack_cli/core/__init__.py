"""
Core application engine for installing a modpack.

The `ModpackInstaller` runs the install steps in order, handing the
concurrent mod downloads to the `ModFetcher` and the overrides to the
`ModpackArchive`.
"""
