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

import unittest

from semodinstall import defaults
from semodinstall.packages import PackageBackend
from semodinstall.errors import PackageInstallError

from fakes import FakeRunner


class TestPackageBackend(unittest.TestCase):
    def setUp(self):
        self.config = defaults.Config("/nonexistent/semodinstall.conf")

    def test_present(self):
        runner = FakeRunner()
        backend = PackageBackend(self.config, runner)
        self.assertFalse(backend.ensure("checkpolicy"))
        self.assertEqual(runner.commands, [(["rpm", "-q", "checkpolicy"], None)])

    def test_install(self):
        runner = FakeRunner(installed=())
        backend = PackageBackend(self.config, runner)
        self.assertTrue(backend.ensure("checkpolicy"))
        self.assertEqual(runner.programs(), ["rpm", "yum", "rpm"])
        self.assertFalse(backend.ensure("checkpolicy"))

    def test_install_failure(self):
        runner = FakeRunner(installed=(), fail={"yum": (1, "No package checkpolicy available.")})
        backend = PackageBackend(self.config, runner)
        try:
            backend.ensure("checkpolicy")
        except PackageInstallError as e:
            self.assertEqual(e.command, "yum -y install checkpolicy")
            self.assertEqual(e.returncode, 1)
            self.assertTrue("checkpolicy" in str(e))
        else:
            self.fail("PackageInstallError not raised")

    def test_still_missing(self):
        # the install command succeeds but the package never shows up
        config = defaults.Config("/nonexistent/semodinstall.conf", package_install="true")
        runner = FakeRunner(installed=())
        backend = PackageBackend(config, runner)
        self.assertRaises(PackageInstallError, backend.ensure, "checkpolicy")
