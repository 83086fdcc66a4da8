import logging

import numpy as np

from pmsmpower.utils import *
from pmsmpower.components.motor import MotorParams
from pmsmpower.limits import Constraint, torque_limits
from pmsmpower.power import operating_point, operating_losses

logger = logging.getLogger(__name__)


LOSS_TERMS = ('mechanical', 'resistive', 'speed', 'hysteresis', 'controller')


def torque_envelope(voltage, rotor_speed, params: MotorParams):
	"""Evaluate the torque limits over a range of rotor speeds

	Parameters
	----------
	voltage: bus voltage
	rotor_speed: array of rotor rad/s
	params: MotorParams

	Returns
	-------
	dict of arrays, one entry per rotor speed
	"""
	rotor_speed = np.atleast_1d(np.asarray(rotor_speed, dtype=float))
	logger.debug("torque envelope over %d speeds at %f V", len(rotor_speed), voltage)
	limits = [torque_limits(voltage, s, params) for s in rotor_speed]
	return {
		'rotor_speed': rotor_speed,
		'lower_limit': np.array([l.lower_limit for l in limits]),
		'upper_limit': np.array([l.upper_limit for l in limits]),
		'lower_power_limited': np.array([l.lower_constraint is Constraint.POWER for l in limits]),
		'upper_power_limited': np.array([l.upper_constraint is Constraint.POWER for l in limits]),
	}


def power_map(voltage, torque, rotor_speed, params: MotorParams):
	"""Net electrical power and its loss terms over a torque x speed grid

	Points outside of the torque envelope are evaluated all the same;
	they are flagged by `within_limits` and left to the caller to mask

	Returns
	-------
	dict of arrays of shape [n_torque, n_speed]
	"""
	torque = np.atleast_1d(np.asarray(torque, dtype=float))
	rotor_speed = np.atleast_1d(np.asarray(rotor_speed, dtype=float))
	logger.debug("power map over %d torques, %d speeds at %f V", len(torque), len(rotor_speed), voltage)

	envelope = torque_envelope(voltage, rotor_speed, params)

	def process_speed(j):
		s = rotor_speed[j]
		points = [operating_point(voltage, t, s, params) for t in torque]
		terms = [operating_losses(voltage, t, s, p, params) for t, p in zip(torque, points)]
		graphs = {k: [l[k] for l in terms] for k in LOSS_TERMS}
		graphs['peak_phase_current_sq'] = [p.peak_phase_current_sq for p in points]
		graphs['feasible'] = [p.feasible for p in points]
		return graphs

	# good old for loop over speed; one column at a time
	columns = [process_speed(j) for j in range(len(rotor_speed))]
	shape = (len(rotor_speed), len(torque))
	graphs = {
		k: np.array([c[k] for c in columns], dtype=bool if k == 'feasible' else float).reshape(shape).T
		for k in LOSS_TERMS + ('peak_phase_current_sq', 'feasible')
	}
	graphs['power'] = sum(graphs[k] for k in LOSS_TERMS)

	T = torque[:, None]
	graphs['within_limits'] = np.logical_and(
		T >= envelope['lower_limit'][None, :],
		T <= envelope['upper_limit'][None, :],
	)
	logger.debug("power map done; %d of %d points within limits", graphs['within_limits'].sum(), T.size * len(rotor_speed))
	return graphs


def envelope_plot(
	params: MotorParams,
	voltage,
	max_speed,
	max_torque=None,
	n_speed=100,
	n_torque=101,
	ax=None,
	show=True,
):
	"""mpl plot of the power map, with the torque envelope on top"""
	import matplotlib.pyplot as plt
	from matplotlib.lines import Line2D

	speed_range = np.linspace(0, max_speed, n_speed + 1, endpoint=True)
	envelope = torque_envelope(voltage, speed_range, params)
	if max_torque is None:
		max_torque = 1.1 * np.max(np.abs([envelope['lower_limit'], envelope['upper_limit']]))
	torque_range = np.linspace(-max_torque, max_torque, n_torque, endpoint=True)

	graphs = power_map(voltage, torque_range, speed_range, params)
	power = np.where(graphs['within_limits'], graphs['power'], np.nan)

	if ax is None:
		fig, ax = plt.subplots(1, 1)
	else:
		fig = ax.figure
		show = False

	plim = np.abs(np.nan_to_num(power)).max() or 1
	mesh = ax.pcolormesh(speed_range, torque_range, power, cmap='bwr', vmin=-plim, vmax=plim)
	fig.colorbar(mesh, ax=ax)

	for key, flag in [('lower_limit', 'lower_power_limited'), ('upper_limit', 'upper_power_limited')]:
		limit = envelope[key]
		ax.plot(speed_range, limit, c='black', linewidth=1)
		ax.plot(
			speed_range, np.where(envelope[flag], limit, np.nan),
			c='black', linewidth=3)

	ax.plot(speed_range, speed_range * 0, c='black', linewidth=0.5)
	ax.legend(handles=[
		Line2D([0], [0], color='black', linewidth=1, label='Phase current limit'),
		Line2D([0], [0], color='black', linewidth=3, label='Power limit'),
	], loc='upper right')
	ax.set_title(f'Electrical power at {voltage:.0f} V')
	ax.set_xlabel('rad/s')
	ax.set_ylabel('Nm')

	if show:
		plt.show()
	return fig, ax
