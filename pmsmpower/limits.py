import enum

import numpy as np

from pmsmpower.utils import *
from pmsmpower.components.motor import MotorParams, assert_non_salient


class Constraint(enum.Enum):
	"""Physical constraint binding a torque limit"""
	PHASE_CURRENT = 'phase_current'
	POWER = 'power'	# voltage limited


@dataclass
class TorqueLimits(Base):
	lower_limit: float
	upper_limit: float
	lower_constraint: Constraint
	upper_constraint: Constraint


@dataclass
class VoltageCircle(Base):
	"""Set of dq currents reachable within the voltage limit, for a non-salient machine

	With the machine impedance Z = Rs + j omega_e L, the dq voltage is
	Z * I + j omega_e lambda, so the voltage limit |V| < vdq_max
	describes a disc in the current plane
	"""
	omega_e: float	# electrical rad/s
	vdq_max: float
	z2: float		# squared impedance magnitude
	id_center: float
	iq_center: float
	iq_radius: float


def voltage_circle(voltage, rotor_speed, params: MotorParams):
	# a drive cannot apply negative bus voltage
	voltage = max(voltage, 0.0)

	L = params.L
	Rs = params.Rs
	lambda_ = params.flux_linkage
	omega_e = rotor_speed * params.num_pole_pairs

	vdq_max = voltage / np.sqrt(3) * params.modulation_limit
	z2 = np.float64(Rs * Rs + L * L * omega_e * omega_e)

	# without resistance, z2 vanishes at standstill; the center is undefined and the radius infinite,
	# which leaves every limit comparison false
	with np.errstate(divide='ignore', invalid='ignore'):
		return VoltageCircle(
			omega_e=omega_e,
			vdq_max=vdq_max,
			z2=z2,
			id_center=-omega_e * omega_e * L * lambda_ / z2,
			iq_center=-Rs * omega_e * lambda_ / z2,
			iq_radius=vdq_max / np.sqrt(z2),
		)


def torque_limits(voltage, rotor_speed, params: MotorParams) -> TorqueLimits:
	"""Feasible torque band at a given bus voltage and rotor speed

	The band is the range of Iq in the intersection of the hard Iq command limits,
	the voltage limit disc, and the phase current limit disc,
	converted to torque assuming a non-salient machine.

	Parameters
	----------
	voltage: bus voltage; negative values are treated as zero
	rotor_speed: rotor rad/s
	params: MotorParams

	Returns
	-------
	TorqueLimits, with the constraint that is binding at each bound.
	lower_limit <= upper_limit is not enforced here.

	References
	----------
	https://nl.mathworks.com/help/mcb/gs/pmsm-constraint-curves-and-their-application.html
	"""
	assert_non_salient(params)

	circle = voltage_circle(voltage, rotor_speed, params)
	omega_e, vdq_max, z2 = circle.omega_e, circle.vdq_max, circle.z2
	L = params.L
	Rs = params.Rs
	lambda_ = params.flux_linkage
	i_phase_lim = params.phase_current_cmd_limit

	# initialize with the hard quadrature current command limits
	iq_lower = params.iq_cmd_lower_limit
	iq_upper = params.iq_cmd_upper_limit
	lower_constraint = Constraint.PHASE_CURRENT
	upper_constraint = Constraint.PHASE_CURRENT

	# voltage limit
	if iq_lower < circle.iq_center - circle.iq_radius:
		lower_constraint = Constraint.POWER
		iq_lower = circle.iq_center - circle.iq_radius
	if iq_upper > circle.iq_center + circle.iq_radius:
		upper_constraint = Constraint.POWER
		iq_upper = circle.iq_center + circle.iq_radius

	# angles at which the phase current circle crosses the voltage circle
	with np.errstate(divide='ignore', invalid='ignore'):
		cos_idq = (vdq_max * vdq_max - z2 * i_phase_lim * i_phase_lim - lambda_ * lambda_ * omega_e * omega_e) / \
			(2 * max(np.abs(omega_e), 1.0) * lambda_ * i_phase_lim * np.sqrt(z2))
	# round-off can push us just outside the domain of arccos
	cos_idq = np.clip(cos_idq, -1.0, 1.0)
	theta_delta = np.arccos(cos_idq)
	theta_ref = np.arctan(Rs / (omega_e * L)) if np.abs(omega_e) > EPS else 0.0

	# lower phase current limit
	theta = np.fmin(theta_ref - theta_delta, -0.5 * np.pi)
	if circle.id_center < i_phase_lim * np.cos(theta) and i_phase_lim * np.sin(theta) > iq_lower:
		lower_constraint = Constraint.PHASE_CURRENT
		iq_lower = i_phase_lim * np.sin(theta)

	# upper phase current limit
	theta = np.fmax(theta_ref + theta_delta, 0.5 * np.pi)
	if circle.id_center < i_phase_lim * np.cos(theta) and i_phase_lim * np.sin(theta) < iq_upper:
		upper_constraint = Constraint.PHASE_CURRENT
		iq_upper = i_phase_lim * np.sin(theta)

	return TorqueLimits(
		lower_limit=float(params.torque_constant * iq_lower),
		upper_limit=float(params.torque_constant * iq_upper),
		lower_constraint=lower_constraint,
		upper_constraint=upper_constraint,
	)
