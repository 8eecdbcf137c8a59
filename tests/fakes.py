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

from semodinstall.runner import CommandRunner, CommandResult

BUILD_TOOLS = ("checkmodule", "semodule_package", "semodule")


class FakeRunner:
    """Stand-in for CommandRunner.

    Records every command.  rpm -q succeeds for packages in
    installed, yum install adds to it, checkmodule and
    semodule_package write their -o file.  Programs named in fail
    exit with the given (returncode, stderr) instead.
    """
    def __init__(self, installed=("selinux-policy-devel", "checkpolicy"), fail=None):
        self.installed = set(installed)
        self.fail = dict(fail or {})
        self.commands = []

    format = staticmethod(CommandRunner.format)

    def run(self, command, cwd=None):
        self.commands.append((list(command), cwd))
        prog = command[0]
        if prog in self.fail:
            rc, err = self.fail[prog]
            return CommandResult(rc, "", err)
        if prog == "rpm":
            return CommandResult(0 if command[-1] in self.installed else 1, "", "")
        if prog == "yum":
            self.installed.add(command[-1])
        elif prog in ("checkmodule", "semodule_package"):
            out = command[command.index("-o") + 1]
            with open(os.path.join(cwd, out), "w") as fd:
                fd.write("%s built by %s\n" % (out, prog))
        return CommandResult(0, "", "")

    def build_commands(self):
        return [self.format(c) for c, cwd in self.commands if c[0] in BUILD_TOOLS]

    def programs(self):
        return [c[0] for c, cwd in self.commands]


class FakeResponse:
    def __init__(self, content=b"", status_code=200):
        self.content = content
        self.status_code = status_code

    def raise_for_status(self):
        import requests
        if self.status_code >= 400:
            raise requests.exceptions.HTTPError("%d Error" % self.status_code, response=self)


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    def get(self, url, timeout=None):
        self.requests.append((url, timeout))
        if self.error:
            raise self.error
        return self.response
