# Copyright (C) 2026 semodinstall contributors
# see file 'COPYING' for use and warranty information
#
# This program is free software; you can redistribute it and/or
# modify it under the terms of the GNU General Public License as
# published by the Free Software Foundation; version 2 only
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program; if not, write to the Free Software
# Foundation, Inc., 59 Temple Place, Suite 330, Boston, MA 02111-1307 USA
#

"""
Retrieval of module sources.

A source is named by a locator.  pkg:// locators (puppet:/// is
accepted as an alias, and the server of a puppet://server/ locator
is ignored) name a file below the configured SOURCE_ROOT,
file:// locators and absolute paths name a local file, and http:// or
https:// locators are downloaded.
"""

import os

import requests

from . import _
from . import defaults
from .errors import SourceFetchError

PUPPET_SCHEME = "puppet://"


class SourceFetcher:
    def __init__(self, config=None, session=None):
        self.config = config or defaults.Config()
        self.session = session

    def fetch(self, source):
        """Return the contents of source as bytes.

        Raises SourceFetchError when the locator is not understood or
        the source cannot be read.
        """
        if not source:
            raise SourceFetchError(_("No source given"))
        if source.startswith("http://") or source.startswith("https://"):
            return self.fetch_url(source)
        return self.read_file(self.resolve(source), source)

    def resolve(self, source):
        """Map a local locator to a filesystem path."""
        if source.startswith("pkg://"):
            return self.source_path(source[len("pkg://"):], source)
        if source.startswith(PUPPET_SCHEME):
            relpath = source[len(PUPPET_SCHEME):]
            if not relpath.startswith("/"):
                # drop the server name
                relpath = relpath.partition("/")[2]
            return self.source_path(relpath, source)
        if source.startswith("file://"):
            path = source[len("file://"):]
        else:
            path = source
        if not os.path.isabs(path):
            raise SourceFetchError(_("Invalid source %s (must be a pkg://, file://, http(s):// locator or an absolute path)") % source)
        return path

    def source_path(self, relpath, source):
        root = os.path.realpath(self.config.get("SOURCE_ROOT"))
        path = os.path.realpath(os.path.join(root, relpath.lstrip("/")))
        if not relpath.strip("/") or os.path.commonpath([root, path]) != root:
            raise SourceFetchError(_("Invalid source %s") % source)
        return path

    def read_file(self, path, source):
        try:
            with open(path, "rb") as fd:
                return fd.read()
        except (IOError, OSError) as e:
            raise SourceFetchError(_("Could not read source %s") % source, output=str(e))

    def fetch_url(self, url):
        session = self.session or requests
        try:
            r = session.get(url, timeout=self.config.getint("FETCH_TIMEOUT"))
            r.raise_for_status()
        except requests.exceptions.RequestException as e:
            raise SourceFetchError(_("Could not fetch source %s") % url, output=str(e))
        return r.content
