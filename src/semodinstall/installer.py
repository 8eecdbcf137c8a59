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
Bringing SELinux policy modules to their installed state.

Installing a module walks a fixed pipeline:

  1. the packages needed to build modules are installed
  2. the type enforcement source is staged as <modules_dir>/<name>.te
  3. the build outputs <name>.mod and <name>.pp are declared
  4. <name>.mod is compiled from <name>.te with checkmodule
  5. <name>.pp is packaged from <name>.mod with semodule_package
  6. <name>.pp is loaded with semodule -i

A step only does work when its output is missing, older than its
input, or its input was changed earlier in the same run.  Running the
pipeline again with unchanged inputs therefore changes nothing.  The
first failing step stops the pipeline and its error propagates; steps
already done are left as they are and are picked up by the next run.
"""

import os
import hashlib
import threading
import concurrent.futures

from . import _
from . import defaults
from .catalog import Catalog, Package, File, Exec, MODULE_TAG, BUILD_TAG
from .errors import ModuleInstallError, CompileError, PackageBuildError, \
    PolicyInstallError
from .fetch import SourceFetcher
from .logger import logger, nulllogger
from .module import ModuleCompiler, is_valid_name, gen_filenames
from .packages import PackageBackend
from .runner import CommandRunner


class ModuleState:
    ABSENT = 0
    PACKAGES_PRESENT = 1
    SOURCE_STAGED = 2
    TARGETS_DECLARED = 3
    COMPILED = 4
    PACKAGED = 5
    INSTALLED = 6

    names = ["Absent", "PackagesPresent", "SourceStaged", "TargetsDeclared",
             "Compiled", "Packaged", "Installed"]

    @classmethod
    def name(cls, state):
        return cls.names[state]


class InstallReport:
    """What one run did (or, in noop mode, would do) to a module."""

    def __init__(self, name, catalog):
        self.name = name
        self.catalog = catalog
        self.state = ModuleState.ABSENT
        self.changes = []
        self.commands = []
        self.log = []

    def change(self, resource, what):
        self.changes.append("%s: %s" % (resource, what))

    def changed(self):
        return len(self.changes) > 0

    def __str__(self):
        return "%s: %s, %d changes" % (self.name, ModuleState.name(self.state), len(self.changes))


def is_stale(output, input):
    """True if output is missing or older than input."""
    if not os.path.exists(output) or not os.path.exists(input):
        return True
    return os.stat(input).st_mtime_ns > os.stat(output).st_mtime_ns

def file_digest(path):
    with open(path, "rb") as fd:
        return hashlib.sha256(fd.read()).hexdigest()

def is_loaded(marker, pp):
    """True if the marker records the current contents of pp."""
    if is_stale(marker, pp):
        return False
    with open(marker, "r") as fd:
        return fd.read().strip() == file_digest(pp)


class ModuleInstaller:
    def __init__(self, config=None, runner=None, fetcher=None, packages=None,
                 output=None, mylog=None, noop=False):
        self.config = config or defaults.Config()
        self.runner = runner or CommandRunner()
        self.fetcher = fetcher or SourceFetcher(self.config)
        self.packages = packages or PackageBackend(self.config, self.runner, output)
        self.output = output
        # only used to render command lines; each run gets its own compiler
        self.compiler = ModuleCompiler(self.runner, output, self.config)
        self.noop = noop
        if mylog is None:
            mylog = nulllogger() if noop else logger()
        self.mylog = mylog
        self.log_lock = threading.Lock()

    def modules_dir(self, modules_dir=None):
        return modules_dir or self.config.get("MODULES_DIR")

    def paths(self, name, modules_dir):
        return [os.path.join(modules_dir, f) for f in gen_filenames(name)]

    def marker_path(self, name, modules_dir):
        return os.path.join(defaults.state_dir(self.config, modules_dir), "." + name + ".loaded")

    def check_name(self, name):
        if not is_valid_name(name):
            raise ValueError(_("Invalid module name %r (must start with a letter and contain only letters, digits, '_', '-' and '.')") % name)

    def catalog(self, name, source, modules_dir=None):
        """Declare the resources installing module name manages."""
        self.check_name(name)
        modules_dir = self.modules_dir(modules_dir)
        te, mod, pp = self.paths(name, modules_dir)
        build_tags = [BUILD_TAG, MODULE_TAG]

        catalog = Catalog()
        for p in self.config.getlist("REQUIRED_PACKAGES"):
            catalog.add(Package(p, tags=[MODULE_TAG]))
        catalog.add(File(te, ensure="present", source=source, tags=[MODULE_TAG]))
        catalog.add(File(mod, tags=build_tags))
        catalog.add(File(pp, tags=build_tags))
        catalog.add(Exec(name + "-buildmod", self.compiler.compile_command(name),
                         cwd=modules_dir, tags=build_tags))
        catalog.add(Exec(name + "-buildpp", self.compiler.package_command(name),
                         cwd=modules_dir, tags=build_tags))
        catalog.add(Exec(name + "-install", self.compiler.install_command(name),
                         cwd=modules_dir, tags=[MODULE_TAG]))
        return catalog

    def install(self, name, source, modules_dir=None):
        """Bring module name, built from source, to the Installed state.

        Returns an InstallReport.  Raises ValueError for an invalid
        name and a ModuleInstallError subclass for the first step that
        fails.
        """
        modules_dir = self.modules_dir(modules_dir)
        report = InstallReport(name, self.catalog(name, source, modules_dir))
        try:
            self.apply(report, source, modules_dir)
        except ModuleInstallError as e:
            report.log.append("install module %s: %s failed" % (name, e.stage))
            self.commit(report, 0)
            raise
        except Exception:
            self.commit(report, 0)
            raise
        self.commit(report, 1)
        return report

    def commit(self, report, success):
        with self.log_lock:
            for msg in report.log:
                self.mylog.log_change(msg)
            self.mylog.commit(success)
        report.log = []

    def new_compiler(self):
        return ModuleCompiler(self.runner, self.output, self.config)

    def install_all(self, modules, jobs=1):
        """Install several modules, each given as (name, source) or
        (name, source, modules_dir).

        Modules are independent of each other and may be processed in
        parallel with jobs > 1.  Reports are returned in the order the
        modules were given; the first failure in that order is raised.
        """
        names = [m[0] for m in modules]
        for n in names:
            if names.count(n) > 1:
                raise ValueError(_("Module %s is declared more than once") % n)
        if jobs <= 1:
            return [self.install(*m) for m in modules]
        with concurrent.futures.ThreadPoolExecutor(max_workers=jobs) as executor:
            futures = [executor.submit(self.install, *m) for m in modules]
            return [f.result() for f in futures]

    def apply(self, report, source, modules_dir):
        name = report.name
        catalog = report.catalog
        te, mod, pp = self.paths(name, modules_dir)
        compiler = self.new_compiler()

        for p in [r for r in catalog if r.type == "package"]:
            self.ensure_package(report, p)
        report.state = ModuleState.PACKAGES_PRESENT

        content = self.fetcher.fetch(source)
        refresh = self.stage_source(report, catalog.get("file", te), content, modules_dir)
        report.state = ModuleState.SOURCE_STAGED

        report.state = ModuleState.TARGETS_DECLARED

        refresh = self.build(report, catalog.get("exec", name + "-buildmod"),
                             te, mod, refresh, compiler, compiler.compile, CompileError)
        report.state = ModuleState.COMPILED

        refresh = self.build(report, catalog.get("exec", name + "-buildpp"),
                             mod, pp, refresh, compiler, compiler.package, PackageBuildError)
        report.state = ModuleState.PACKAGED

        self.load(report, catalog.get("exec", name + "-install"), pp,
                  self.marker_path(name, modules_dir), refresh, compiler)
        report.state = ModuleState.INSTALLED

    def ensure_package(self, report, package):
        if self.noop:
            if not self.packages.is_installed(package.title):
                report.change(package, "would be installed")
        elif self.packages.ensure(package.title):
            report.change(package, "installed")
            report.log.append("install package %s" % package.title)

    def stage_source(self, report, resource, content, modules_dir):
        path = resource.path
        if os.path.isfile(path):
            with open(path, "rb") as fd:
                if fd.read() == content:
                    return False
        if self.noop:
            report.change(resource, "would be written from %s" % resource.source)
            return True
        if not os.path.isdir(modules_dir):
            os.makedirs(modules_dir)
        tmp = path + ".tmp"
        try:
            with open(tmp, "wb") as fd:
                fd.write(content)
            os.rename(tmp, path)
        except OSError:
            if os.path.exists(tmp):
                os.unlink(tmp)
            raise
        report.change(resource, "written from %s" % resource.source)
        report.log.append("stage module source %s from %s" % (path, resource.source))
        return True

    def build(self, report, resource, input, output, refresh, compiler, step, error):
        if not (refresh or is_stale(output, input)):
            return False
        if self.noop:
            report.change(resource, "would run %s" % self.runner.format(resource.command))
            return True
        if not os.path.exists(input):
            raise error(_("Cannot build %s: %s does not exist") % (output, input))
        report.commands.append(self.runner.format(resource.command))
        step(report.name, resource.cwd)
        if not os.path.exists(output):
            raise error(_("%s did not produce %s") % (self.runner.format(resource.command), output),
                        command=self.runner.format(resource.command), output=compiler.last_output)
        report.change(resource, "executed successfully")
        report.log.append("build %s" % output)
        return True

    def load(self, report, resource, pp, marker, refresh, compiler):
        if not (refresh or is_loaded(marker, pp)):
            return False
        if self.noop:
            report.change(resource, "would run %s" % self.runner.format(resource.command))
            return True
        if not os.path.exists(pp):
            raise PolicyInstallError(_("Cannot install module %s: %s does not exist") % (report.name, pp))
        report.commands.append(self.runner.format(resource.command))
        compiler.load(report.name, resource.cwd)
        marker_dir = os.path.dirname(marker)
        if not os.path.isdir(marker_dir):
            os.makedirs(marker_dir)
        with open(marker, "w") as fd:
            fd.write(file_digest(pp) + "\n")
        report.change(resource, "executed successfully")
        report.log.append("install module %s" % report.name)
        return True

    def status(self, name, modules_dir=None):
        """Return the ModuleState of module name as found on disk.

        Build outputs only count while they are up to date with their
        inputs; TargetsDeclared is never reported since declarations
        leave no trace on disk.
        """
        self.check_name(name)
        modules_dir = self.modules_dir(modules_dir)
        te, mod, pp = self.paths(name, modules_dir)
        marker = self.marker_path(name, modules_dir)

        state = ModuleState.ABSENT
        if all(self.packages.is_installed(p) for p in self.config.getlist("REQUIRED_PACKAGES")):
            state = ModuleState.PACKAGES_PRESENT
        if not os.path.exists(te):
            return state
        state = ModuleState.SOURCE_STAGED
        for output, input, reached in [(mod, te, ModuleState.COMPILED),
                                       (pp, mod, ModuleState.PACKAGED)]:
            if is_stale(output, input):
                return state
            state = reached
        if is_loaded(marker, pp):
            state = ModuleState.INSTALLED
        return state

    def remove(self, name, modules_dir=None):
        """Unload module name and delete its staged files.

        The module is only unloaded with semodule -r when this tool
        loaded it.  Removing a module that is not there does nothing.
        """
        self.check_name(name)
        modules_dir = self.modules_dir(modules_dir)
        marker = self.marker_path(name, modules_dir)

        catalog = Catalog()
        files = [catalog.add(File(p, ensure="absent", tags=[MODULE_TAG]))
                 for p in self.paths(name, modules_dir)]
        unload = catalog.add(Exec(name + "-remove", self.compiler.remove_command(name),
                                  tags=[MODULE_TAG]))
        report = InstallReport(name, catalog)

        try:
            if os.path.exists(marker):
                if self.noop:
                    report.change(unload, "would run %s" % self.runner.format(unload.command))
                else:
                    report.commands.append(self.runner.format(unload.command))
                    self.new_compiler().unload(name)
                    os.unlink(marker)
                    report.change(unload, "executed successfully")
                    report.log.append("remove module %s" % name)
            for f in files:
                if not os.path.exists(f.path):
                    continue
                if self.noop:
                    report.change(f, "would be removed")
                else:
                    os.unlink(f.path)
                    report.change(f, "removed")
                    report.log.append("remove %s" % f.path)
        except Exception:
            self.commit(report, 0)
            raise
        report.state = ModuleState.ABSENT
        self.commit(report, 1)
        return report
