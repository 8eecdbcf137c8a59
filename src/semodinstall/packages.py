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
Presence of the packages needed to build policy modules.
"""

import threading

from . import _
from . import defaults
from .runner import CommandRunner
from .errors import PackageInstallError

# Package state is host wide, so ensure() calls from every installer
# in the process go through this lock.
package_lock = threading.Lock()


class PackageBackend:
    """Query and install packages with the host package tools.

    The query command (rpm -q by default) must exit 0 when the
    package is installed; the install command (yum -y install by
    default) is only run for packages the query reports missing.
    """
    def __init__(self, config=None, runner=None, output=None):
        self.config = config or defaults.Config()
        self.runner = runner or CommandRunner()
        self.output = output

    def o(self, str):
        if self.output:
            self.output.write(str + "\n")

    def is_installed(self, name):
        command = self.config.getlist("PACKAGE_QUERY") + [name]
        return self.runner.run(command).returncode == 0

    def install(self, name):
        command = self.config.getlist("PACKAGE_INSTALL") + [name]
        self.o(self.runner.format(command))
        result = self.runner.run(command)
        self.o(result.stdout + result.stderr)
        if result.returncode != 0:
            raise PackageInstallError(_("Could not install package %s") % name,
                                      command=self.runner.format(command),
                                      returncode=result.returncode,
                                      output=result.stderr)

    def ensure(self, name):
        """Make sure package name is installed.

        Returns True if the package had to be installed, False if it
        already was.
        """
        with package_lock:
            if self.is_installed(name):
                return False
            self.install(name)
            if not self.is_installed(name):
                raise PackageInstallError(_("Package %s is still not installed") % name)
            return True
