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
Utilities for dealing with the compilation, packaging and loading of
modules.
"""

import re

from . import _
from . import defaults
from .runner import CommandRunner
from .errors import CompileError, PackageBuildError, PolicyInstallError


def is_valid_name(modname):
    """Check that a module name is valid.
    """
    if not modname:
        return False
    m = re.findall(r"[^a-zA-Z0-9_\-\.]", modname)
    if len(m) == 0 and modname[0].isalpha():
        return True
    else:
        return False

def gen_filenames(modname):
    """Return the (source, module, package) file names of a module."""
    return (modname + ".te", modname + ".mod", modname + ".pp")

class ModuleCompiler:
    """ModuleCompiler eases running of the module compiler.

    The ModuleCompiler class encapsulates running the commandline
    module compiler (checkmodule), the module packager
    (semodule_package) and the policy module manager (semodule).
    Commands are run in the directory holding the module files and
    only name the files relative to it.

    The tools are looked up through the configuration:

     CHECKMODULE       [string] Module compiler. Modules are always
                       built as MLS (-M) non-base (-m) modules.

     SEMODULE_PACKAGE  [string] Module packager.

     SEMODULE          [string] Policy module manager used to load
                       and remove packages.

    Each command line and its output are written to the output file
    object, when one is given.
    """
    def __init__(self, runner=None, output=None, config=None):
        self.config = config or defaults.Config()
        self.runner = runner or CommandRunner()
        self.output = output
        self.last_output = ""
        self.checkmodule = self.config.get("CHECKMODULE")
        self.semodule_package = self.config.get("SEMODULE_PACKAGE")
        self.semodule = self.config.get("SEMODULE")

    def o(self, str):
        if self.output:
            self.output.write(str + "\n")
        self.last_output = str

    def run(self, command, cwd=None):
        self.o(self.runner.format(command))
        result = self.runner.run(command, cwd)
        self.o(result.stdout + result.stderr)
        return result

    def compile_command(self, modname):
        sourcename, modfile, packagename = gen_filenames(modname)
        return [self.checkmodule, "-M", "-m", "-o", modfile, sourcename]

    def package_command(self, modname):
        sourcename, modfile, packagename = gen_filenames(modname)
        return [self.semodule_package, "-m", modfile, "-o", packagename]

    def install_command(self, modname):
        return [self.semodule, "-i", gen_filenames(modname)[2]]

    def remove_command(self, modname):
        return [self.semodule, "-r", modname]

    def _check(self, error, message, command, result):
        if result.returncode != 0:
            raise error(message, command=self.runner.format(command),
                        returncode=result.returncode,
                        output=result.stderr or result.stdout)

    def compile(self, modname, cwd):
        command = self.compile_command(modname)
        result = self.run(command, cwd)
        self._check(CompileError, _("compilation of %s failed") % modname, command, result)
        return result

    def package(self, modname, cwd):
        command = self.package_command(modname)
        result = self.run(command, cwd)
        self._check(PackageBuildError, _("packaging of %s failed") % modname, command, result)
        return result

    def load(self, modname, cwd):
        command = self.install_command(modname)
        result = self.run(command, cwd)
        self._check(PolicyInstallError, _("Could not install module %s") % modname, command, result)
        return result

    def unload(self, modname):
        command = self.remove_command(modname)
        result = self.run(command)
        self._check(PolicyInstallError, _("Could not remove module %s (remove failed)") % modname, command, result)
        return result
