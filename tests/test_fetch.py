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

import os
import shutil
import unittest
from tempfile import mkdtemp

import requests

from semodinstall import defaults
from semodinstall.fetch import SourceFetcher
from semodinstall.errors import SourceFetchError

from fakes import FakeResponse, FakeSession

TE = b"module rsynclocal 1.0;\n"


class TestSourceFetcher(unittest.TestCase):
    def setUp(self):
        self.tmpdir = mkdtemp(suffix="semodinstall_test")
        self.root = os.path.join(self.tmpdir, "files")
        os.makedirs(os.path.join(self.root, "modules", "selinux"))
        self.te = os.path.join(self.root, "modules", "selinux", "rsynclocal.te")
        with open(self.te, "wb") as fd:
            fd.write(TE)
        self.config = defaults.Config("/nonexistent/semodinstall.conf", source_root=self.root)

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_pkg(self):
        f = SourceFetcher(self.config)
        self.assertEqual(f.fetch("pkg://modules/selinux/rsynclocal.te"), TE)
        self.assertEqual(f.fetch("puppet:///modules/selinux/rsynclocal.te"), TE)

    def test_puppet_server_ignored(self):
        f = SourceFetcher(self.config)
        self.assertEqual(f.fetch("puppet://puppet.example.com/modules/selinux/rsynclocal.te"), TE)
        self.assertRaises(SourceFetchError, f.fetch, "puppet://puppet.example.com")
        self.assertRaises(SourceFetchError, f.fetch, "puppet://puppet.example.com/")

    def test_local_paths(self):
        f = SourceFetcher(self.config)
        self.assertEqual(f.fetch(self.te), TE)
        self.assertEqual(f.fetch("file://" + self.te), TE)

    def test_invalid(self):
        f = SourceFetcher(self.config)
        for source in ["", "rsynclocal.te", "ftp://example.com/rsynclocal.te",
                       "pkg://", "pkg://../../etc/shadow",
                       "pkg://modules/selinux/missing.te",
                       "file://" + os.path.join(self.tmpdir, "missing.te")]:
            self.assertRaises(SourceFetchError, f.fetch, source)

    def test_http(self):
        session = FakeSession(FakeResponse(TE))
        f = SourceFetcher(self.config, session=session)
        self.assertEqual(f.fetch("https://example.com/rsynclocal.te"), TE)
        self.assertEqual(session.requests, [("https://example.com/rsynclocal.te", 30)])

    def test_http_errors(self):
        f = SourceFetcher(self.config, session=FakeSession(FakeResponse(b"", 404)))
        self.assertRaises(SourceFetchError, f.fetch, "http://example.com/rsynclocal.te")

        error = requests.exceptions.ConnectionError("connection refused")
        f = SourceFetcher(self.config, session=FakeSession(error=error))
        try:
            f.fetch("http://example.com/rsynclocal.te")
        except SourceFetchError as e:
            self.assertEqual(e.stage, "fetch")
            self.assertTrue("connection refused" in e.output)
        else:
            self.fail("SourceFetchError not raised")
