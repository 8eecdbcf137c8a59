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
Errors raised while bringing a policy module to its installed state.

Every error records the pipeline stage that failed.  Errors raised
from an external command also carry the command line, its exit code
and whatever it printed, so the caller can report why it failed.
"""


class ModuleInstallError(RuntimeError):
    stage = None

    def __init__(self, message, command=None, returncode=None, output=""):
        RuntimeError.__init__(self, message)
        self.message = message
        self.command = command
        self.returncode = returncode
        self.output = output

    def __str__(self):
        s = self.message
        if self.returncode is not None:
            s += " (exit status %d)" % self.returncode
        if self.output:
            s += ":\n%s" % self.output.rstrip()
        return s


class PackageInstallError(ModuleInstallError):
    stage = "packages"


class SourceFetchError(ModuleInstallError):
    stage = "fetch"


class CompileError(ModuleInstallError):
    stage = "compile"


class PackageBuildError(ModuleInstallError):
    stage = "package"


class PolicyInstallError(ModuleInstallError):
    stage = "install"
